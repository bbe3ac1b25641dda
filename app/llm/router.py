from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from app.llm.base import ProviderRegistry
from app.llm.context import ContextStore
from app.llm.errors import TIMEOUT_ERRORS, InvalidOptionsError, ProviderError
from app.llm.types import GenerationOptions

logger = logging.getLogger("uvicorn.error")

OptionsIn = Union[GenerationOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsIn) -> GenerationOptions:
    """Validate caller options, raising InvalidOptionsError for bad values."""
    if isinstance(options, GenerationOptions):
        return options
    if options is None:
        return GenerationOptions()
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(f"expected a mapping, got {type(options).__name__}")
    data = dict(options)
    if data.get("context") is None:
        data.pop("context", None)
    try:
        return GenerationOptions.model_validate(data)
    except ValidationError as e:
        fields = ",".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidOptionsError(fields or "invalid value") from e


def merge_options(options: OptionsIn, ambient: Mapping[str, Any]) -> GenerationOptions:
    """Put the ambient context under options.context.

    The caller's own options.context is kept for this one request, but ambient
    keys win on collision so the provider always sees the store's full contents.
    Every other option field is left as the caller set it.
    """
    validated = coerce_options(options)
    data = validated.model_dump(by_alias=False, exclude_unset=True)
    data.update(validated.passthrough())
    request_context = data.pop("context", None) or {}
    merged = GenerationOptions.model_validate(data)
    merged.context = {**request_context, **ambient}
    return merged


class ModelRouter:
    """Sends generate() calls to the registry's active provider, one call one provider."""

    def __init__(self, registry: ProviderRegistry, context: ContextStore) -> None:
        self.registry = registry
        self.context = context

    async def dispatch(self, prompt: str, options: OptionsIn = None, *, timeout_s: Optional[float] = None) -> str:
        merged = merge_options(options, self.context.snapshot())
        name, provider = self.registry.active()
        logger.info("llm:router dispatch provider=%s model=%s", name, merged.model or "default")
        start = time.perf_counter()
        try:
            if timeout_s is None:
                text = await provider.generate(prompt, merged)
            else:
                text = await asyncio.wait_for(provider.generate(prompt, merged), timeout=timeout_s)
        except ProviderError:
            raise
        except TIMEOUT_ERRORS as e:
            logger.warning("llm:router timeout provider=%s timeout_s=%s", name, timeout_s)
            raise ProviderError(name, e) from e
        except Exception as e:
            logger.error("llm:router provider_failed provider=%s", name, exc_info=True)
            raise ProviderError(name, e) from e
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info("llm:router done provider=%s latency_ms=%s", name, latency_ms)
        return text
