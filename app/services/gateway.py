from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Mapping, Optional, Union

from app.llm.base import GenerationProvider, ProviderRegistry
from app.llm.context import ContextStore
from app.llm.errors import PermissionDeniedError
from app.llm.factory import build_provider
from app.llm.governor import RequestGovernor
from app.llm.prompt_templates import (
    HEALTH_PRESET,
    INSIGHTS_CONTEXT,
    INSIGHTS_PROMPT,
    SCHEDULE_PRESET,
    TASK_SUGGESTIONS_PRESET,
    build_health_prompt,
    build_schedule_prompt,
    build_task_suggestions_prompt,
)
from app.llm.router import ModelRouter, coerce_options
from app.llm.types import GenerationOptions, PermissionSet
from app.services.backend import BackendClient

logger = logging.getLogger("uvicorn.error")

ACCESS_DATA = "accessData"
UPDATE_UI = "updateUI"
EXECUTE_COMMANDS = "executeCommands"

OptionsIn = Union[GenerationOptions, Mapping[str, Any], None]


class GatewayService:
    """Single entry point for AI requests: governor, then router, then the active provider.

    Every generate call is admitted by the governor first. An admitted request is
    charged against the rate window even if the provider then fails.
    """

    def __init__(
        self,
        permissions: PermissionSet,
        *,
        registry: Optional[ProviderRegistry] = None,
        context: Optional[ContextStore] = None,
        governor: Optional[RequestGovernor] = None,
        backend: Optional[BackendClient] = None,
        default_temperature: float = 0.7,
        timeout_s: Optional[float] = None,
    ):
        self.registry = registry or ProviderRegistry()
        self.context = context or ContextStore()
        self.governor = governor or RequestGovernor(permissions)
        self.router = ModelRouter(self.registry, self.context)
        self.backend = backend
        self.default_temperature = default_temperature
        self.timeout_s = timeout_s

    @classmethod
    def from_settings(cls, settings, *, backend: Optional[BackendClient] = None) -> "GatewayService":
        service = cls(
            settings.permission_set(),
            backend=backend or BackendClient.from_settings(settings),
            default_temperature=settings.DEFAULT_TEMPERATURE,
            timeout_s=settings.LLM_TIMEOUT_MS / 1000.0,
        )
        for name, available in settings.MODEL_AVAILABILITY.items():
            if not available:
                continue
            try:
                service.register_model(name, build_provider(name, settings))
            except Exception:
                # fail soft; the provider just stays unregistered
                logger.warning("llm:gateway provider_skipped name=%s", name, exc_info=True)
        return service

    def register_model(self, name: str, provider: GenerationProvider) -> None:
        self.registry.register(name, provider)

    def set_active_model(self, name: str) -> str:
        self.registry.switch_active(name)
        return name

    @property
    def active_model(self) -> Optional[str]:
        return self.registry.active_name

    def models(self) -> List[str]:
        return self.registry.names()

    def add_context(self, key: str, value: Any) -> None:
        self.context.set(key, value)

    def get_context(self, key: str) -> Optional[Any]:
        return self.context.get(key)

    def clear_context(self) -> None:
        self.context.clear()

    async def generate_response(self, prompt: str, options: OptionsIn = None) -> str:
        validated = self._with_default_temperature(coerce_options(options))
        self.governor.admit(ACCESS_DATA)
        return await self.router.dispatch(prompt, validated, timeout_s=self.timeout_s)

    async def generate_task_suggestions(self, context: Any) -> str:
        temperature, max_tokens = TASK_SUGGESTIONS_PRESET
        return await self.generate_response(
            build_task_suggestions_prompt(context), {"temperature": temperature, "max_tokens": max_tokens}
        )

    async def optimize_schedule(self, schedule: Any) -> str:
        temperature, max_tokens = SCHEDULE_PRESET
        return await self.generate_response(
            build_schedule_prompt(schedule), {"temperature": temperature, "max_tokens": max_tokens}
        )

    async def generate_health_recommendations(self, health_data: Any) -> str:
        temperature, max_tokens = HEALTH_PRESET
        return await self.generate_response(
            build_health_prompt(health_data), {"temperature": temperature, "max_tokens": max_tokens}
        )

    async def generate_dashboard_insights(self) -> str:
        return await self.generate_response(INSIGHTS_PROMPT, {"context": dict(INSIGHTS_CONTEXT)})

    def _with_default_temperature(self, options: GenerationOptions) -> GenerationOptions:
        if options.temperature is not None:
            return options
        return options.model_copy(update={"temperature": self.default_temperature})

    async def update_interface(self, changes: Dict[str, Any]) -> Any:
        if not self.governor.check_permission(UPDATE_UI) or not self.governor.permissions.allow_interface_changes:
            logger.warning("llm:gateway denied action=%s", UPDATE_UI)
            raise PermissionDeniedError(UPDATE_UI)
        return await self._require_backend().update_ui(changes)

    async def execute_command(self, command: Any) -> Any:
        if not self.governor.check_permission(EXECUTE_COMMANDS) or not self.governor.permissions.allow_backend_access:
            logger.warning("llm:gateway denied action=%s", EXECUTE_COMMANDS)
            raise PermissionDeniedError(EXECUTE_COMMANDS)
        return await self._require_backend().execute_command(command)

    def _require_backend(self) -> BackendClient:
        if self.backend is None:
            raise RuntimeError("backend client not configured")
        return self.backend

    async def aclose(self) -> None:
        async with AsyncExitStack() as stack:
            if self.backend is not None:
                stack.push_async_callback(self.backend.aclose)
            for name in self.registry.names():
                close = getattr(self.registry.get(name), "aclose", None)
                if close is not None:
                    stack.push_async_callback(close)
