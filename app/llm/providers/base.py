from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.llm.errors import MalformedResponseError
from app.llm.types import GenerationOptions, ProviderSettings

logger = logging.getLogger("uvicorn.error")


class HTTPProvider:
    """Shared plumbing for adapters that talk JSON over HTTP with httpx."""

    name = "http"

    def __init__(self, config: ProviderSettings, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client or httpx.AsyncClient(timeout=config.timeout_s)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        url = self._url(path)
        start = time.perf_counter()
        logger.info("llm:%s request url=%s", self.name, url)
        resp = await self.client.post(url, json=payload, headers=self._headers())
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info("llm:%s response status=%s latency_ms=%s", self.name, resp.status_code, latency_ms)
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"{self.name}: response is not JSON") from e

    def _model(self, options: GenerationOptions) -> str:
        return options.model or self.config.default_model

    def _temperature(self, options: GenerationOptions) -> float:
        return options.temperature if options.temperature is not None else self.config.temperature

    def _max_tokens(self, options: GenerationOptions) -> int:
        return options.max_tokens if options.max_tokens is not None else self.config.max_tokens

    def _system_prompt(self, options: GenerationOptions) -> str:
        return str(options.context.get("systemPrompt") or self.config.system_prompt)

    def _extract(self, data: Any, *path: Any) -> Any:
        cur = data
        try:
            for key in path:
                cur = cur[key]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(f"{self.name}: missing {'.'.join(map(str, path))} in response") from e
        return cur

    async def aclose(self) -> None:
        await self.client.aclose()
