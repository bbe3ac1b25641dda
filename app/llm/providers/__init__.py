from app.llm.providers.base import HTTPProvider
from app.llm.providers.cohere import CohereProvider
from app.llm.providers.huggingface import HuggingFaceProvider
from app.llm.providers.localai import LocalAIProvider
from app.llm.providers.ollama import OllamaProvider
from app.llm.providers.openai import OpenAIProvider
from app.llm.providers.replicate import ReplicateProvider
from app.llm.providers.stability import StabilityProvider

__all__ = [
    "CohereProvider",
    "HTTPProvider",
    "HuggingFaceProvider",
    "LocalAIProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "ReplicateProvider",
    "StabilityProvider",
]
