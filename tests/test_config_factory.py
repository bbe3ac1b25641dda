import pytest

from app.core.config import Settings
from app.llm.errors import UnknownProviderError
from app.llm.factory import build_provider
from app.llm.providers import CohereProvider, OllamaProvider, StabilityProvider
from app.services.gateway import GatewayService
from tests.fixtures import DummyBackend


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("MAX_REQUESTS_PER_MINUTE", raising=False)
    s = Settings(_env_file=None)
    perms = s.permission_set()
    assert perms.max_requests_per_minute == 60
    assert perms.allows("accessData")
    assert perms.allow_interface_changes and perms.allow_backend_access

    cohere = s.provider_settings("cohere")
    assert cohere.base_url == "https://api.cohere.ai/v1"
    assert cohere.default_model == "command"
    stability = s.provider_settings("stability")
    assert stability.steps == 30 and stability.cfg_scale == 7
    ollama = s.provider_settings("ollama")
    assert ollama.api_key is None
    assert ollama.default_model == "llama2"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("MODEL_AVAILABILITY", '{"ollama": true, "cohere": false}')
    monkeypatch.setenv("ALLOWED_ACTIONS", '["accessData"]')
    monkeypatch.setenv("MAX_REQUESTS_PER_MINUTE", "5")
    s = Settings(_env_file=None)
    assert s.MODEL_AVAILABILITY == {"ollama": True, "cohere": False}
    perms = s.permission_set()
    assert perms.allowed_actions == frozenset({"accessData"})
    assert perms.max_requests_per_minute == 5


def test_build_provider():
    s = Settings(_env_file=None)
    assert isinstance(build_provider("cohere", s), CohereProvider)
    assert isinstance(build_provider("stability", s), StabilityProvider)
    assert isinstance(build_provider("ollama", s), OllamaProvider)
    with pytest.raises(UnknownProviderError):
        build_provider("gemini", s)


@pytest.mark.asyncio
async def test_from_settings_registers_available_in_order(monkeypatch):
    monkeypatch.setenv("MODEL_AVAILABILITY", '{"ollama": true, "openai": false, "localai": true}')
    gw = GatewayService.from_settings(Settings(_env_file=None), backend=DummyBackend())
    try:
        assert gw.models() == ["ollama", "localai"]
        assert gw.active_model == "ollama"
    finally:
        await gw.aclose()


@pytest.mark.asyncio
async def test_from_settings_skips_unbuildable(monkeypatch):
    monkeypatch.setenv("MODEL_AVAILABILITY", '{"mystery": true, "cohere": true}')
    gw = GatewayService.from_settings(Settings(_env_file=None), backend=DummyBackend())
    try:
        assert gw.models() == ["cohere"]
        assert gw.active_model == "cohere"
    finally:
        await gw.aclose()
