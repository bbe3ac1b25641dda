from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("uvicorn.error")


class BackendClient:
    """Dashboard backend endpoints. Payloads are passed through as-is."""

    def __init__(
        self,
        base_url: str,
        *,
        ui_update_path: str = "/api/ui/update",
        commands_path: str = "/api/system",
        auth_token: Optional[str] = None,
        timeout_s: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.ui_update_path = ui_update_path
        self.commands_path = commands_path
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_s)
        self.headers = headers

    @classmethod
    def from_settings(cls, settings) -> "BackendClient":
        return cls(
            settings.BACKEND_BASE_URL,
            ui_update_path=settings.BACKEND_UI_UPDATE_PATH,
            commands_path=settings.BACKEND_SYSTEM_COMMANDS_PATH,
            auth_token=settings.BACKEND_AUTH_TOKEN,
            timeout_s=settings.BACKEND_TIMEOUT_MS / 1000.0,
        )

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        resp = await self.client.post(path, json=body, headers=self.headers)
        logger.info("backend:post path=%s status=%s", path, resp.status_code)
        resp.raise_for_status()
        return resp.json()

    async def update_ui(self, changes: Dict[str, Any]) -> Any:
        return await self._post(self.ui_update_path, changes)

    async def execute_command(self, command: Any) -> Any:
        return await self._post(self.commands_path, {"command": command})

    async def aclose(self) -> None:
        await self.client.aclose()
