import asyncio

import pytest

from app.llm.base import ProviderRegistry
from app.llm.context import ContextStore
import httpx

from app.llm.errors import InvalidOptionsError, ProviderError
from app.llm.providers import CohereProvider
from app.llm.router import ModelRouter, merge_options
from app.llm.types import GenerationOptions, ProviderSettings
from tests.fixtures import EchoProvider, FailingProvider


def _router(provider) -> ModelRouter:
    reg = ProviderRegistry()
    reg.register("p", provider)
    return ModelRouter(reg, ContextStore())


def test_context_store_basics():
    store = ContextStore()
    assert store.get("missing") is None
    store.set("k", "v")
    store.set("k", "v2")
    assert store.get("k") == "v2"
    store.set("other", {"nested": True})
    assert len(store) == 2
    store.clear()
    assert store.snapshot() == {}
    assert "k" not in store


@pytest.mark.asyncio
async def test_dispatch_merges_ambient_context():
    prov = EchoProvider()
    router = _router(prov)
    router.context.set("k", "v")
    await router.dispatch("hi", {})
    _, options = prov.calls[-1]
    assert options.context["k"] == "v"

    router.context.clear()
    await router.dispatch("hi", {})
    _, options = prov.calls[-1]
    assert "k" not in options.context


@pytest.mark.asyncio
async def test_request_context_cannot_override_store_keys():
    prov = EchoProvider()
    router = _router(prov)
    router.context.set("currentView", "Dashboard")
    router.context.set("theme", "dark")
    await router.dispatch("hi", {"context": {"currentView": "Tasks", "focus": "inbox"}, "temperature": 0.3})
    _, options = prov.calls[-1]
    assert options.context == {"currentView": "Dashboard", "theme": "dark", "focus": "inbox"}
    assert options.temperature == 0.3
    assert router.context.get("currentView") == "Dashboard"
    assert "focus" not in router.context


def test_merge_options_keeps_passthrough_and_alias():
    merged = merge_options({"maxTokens": 42, "cfgScale": 9, "model": "m"}, {"a": 1})
    assert merged.max_tokens == 42
    assert merged.model == "m"
    assert merged.passthrough() == {"cfgScale": 9}
    assert merged.context == {"a": 1}

    from_model = merge_options(GenerationOptions(temperature=0.5, steps=10), {})
    assert from_model.temperature == 0.5
    assert from_model.passthrough() == {"steps": 10}


@pytest.mark.asyncio
async def test_provider_failure_is_wrapped_with_cause():
    boom = ConnectionError("down")
    router = _router(FailingProvider(boom))
    with pytest.raises(ProviderError) as info:
        await router.dispatch("hi")
    assert info.value.cause is boom
    assert info.value.__cause__ is boom
    assert info.value.provider == "p"
    assert info.value.code == "provider_error"


@pytest.mark.asyncio
async def test_timeout_is_reported_as_provider_error():
    class SlowProvider:
        async def generate(self, prompt, options):
            await asyncio.sleep(2)
            return "late"

    router = _router(SlowProvider())
    with pytest.raises(ProviderError) as info:
        await router.dispatch("hi", timeout_s=0.05)
    assert isinstance(info.value.cause, TimeoutError)
    assert info.value.is_timeout
    assert info.value.status_code == 504


@pytest.mark.asyncio
async def test_transport_timeout_is_reported_as_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    config = ProviderSettings(api_key="k", base_url="https://api.cohere.ai/v1", default_model="command")
    router = _router(CohereProvider(config, client=client))
    with pytest.raises(ProviderError) as info:
        await router.dispatch("hi", timeout_s=5)
    assert isinstance(info.value.cause, httpx.ReadTimeout)
    assert info.value.is_timeout
    assert info.value.code == "provider_timeout"
    assert info.value.status_code == 504
    await client.aclose()


@pytest.mark.parametrize("options", [{"temperature": "hot"}, {"context": "notamapping"}, ["temperature"]])
def test_merge_options_rejects_bad_values(options):
    with pytest.raises(InvalidOptionsError) as info:
        merge_options(options, {})
    assert info.value.status_code == 422
