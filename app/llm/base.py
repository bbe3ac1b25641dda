from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol, runtime_checkable

from app.llm.errors import InvalidProviderError, NoActiveProviderError, UnknownProviderError
from app.llm.types import GenerationOptions

logger = logging.getLogger("uvicorn.error")


@runtime_checkable
class GenerationProvider(Protocol):
    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        ...


class ProviderRegistry:
    """Named providers plus the single active one.

    The active name, when set, always refers to a registered provider. There is
    no unregister, so once anything is registered the registry never goes back
    to having no active provider.
    """

    def __init__(self) -> None:
        self._providers: dict[str, GenerationProvider] = {}
        self._active: Optional[str] = None
        self._lock = threading.Lock()

    def register(self, name: str, provider: GenerationProvider) -> None:
        if not callable(getattr(provider, "generate", None)):
            raise InvalidProviderError(name)
        with self._lock:
            self._providers[name] = provider
            if self._active is None:
                self._active = name
            active = self._active
        logger.info("llm:registry register name=%s active=%s", name, active)

    def switch_active(self, name: str) -> GenerationProvider:
        with self._lock:
            provider = self._providers.get(name)
            if provider is None:
                raise UnknownProviderError(name)
            self._active = name
        logger.info("llm:registry switch active=%s", name)
        return provider

    def active_provider(self) -> GenerationProvider:
        return self.active()[1]

    def active(self) -> tuple[str, GenerationProvider]:
        with self._lock:
            if self._active is None:
                raise NoActiveProviderError()
            return self._active, self._providers[self._active]

    @property
    def active_name(self) -> Optional[str]:
        with self._lock:
            return self._active

    def get(self, name: str) -> GenerationProvider:
        with self._lock:
            if name not in self._providers:
                raise UnknownProviderError(name)
            return self._providers[name]

    def names(self) -> list[str]:
        with self._lock:
            return list(self._providers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._providers

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)
