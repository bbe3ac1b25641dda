from __future__ import annotations

from typing import Any, Callable, Dict

from app.llm.base import GenerationProvider
from app.llm.errors import UnknownProviderError
from app.llm.providers import (
    CohereProvider,
    HuggingFaceProvider,
    LocalAIProvider,
    OllamaProvider,
    OpenAIProvider,
    ReplicateProvider,
    StabilityProvider,
)
from app.llm.types import ProviderSettings

PROVIDER_CLASSES: Dict[str, Callable[[ProviderSettings], GenerationProvider]] = {
    "openai": OpenAIProvider,
    "huggingface": HuggingFaceProvider,
    "cohere": CohereProvider,
    "stability": StabilityProvider,
    "replicate": ReplicateProvider,
    "ollama": OllamaProvider,
    "localai": LocalAIProvider,
}


def build_provider(name: str, settings: Any) -> GenerationProvider:
    factory = PROVIDER_CLASSES.get(name)
    if factory is None:
        raise UnknownProviderError(name)
    return factory(settings.provider_settings(name))
