import copy
import json
import logging
from typing import Any, Dict, Optional

from app.llm.errors import GatewayError
from app.llm.prompt_templates import UI_RECOMMENDATIONS_PROMPT, UI_RECOMMENDATIONS_PRESET
from app.services.gateway import GatewayService

logger = logging.getLogger("uvicorn.error")

DEFAULT_UI_RECOMMENDATIONS: Dict[str, Any] = {
    "design": {
        "minimalistic": True,
        "colorScheme": {
            "primary": "#2196F3",
            "secondary": "#4CAF50",
            "background": "#FFFFFF",
            "text": "#212121",
            "accent": "#FF4081",
        },
        "typography": {"fontFamily": "Inter, sans-serif", "baseSize": "16px", "headingScale": 1.2},
    },
    "layout": {
        "maxWidth": "1200px",
        "spacing": {"base": "1rem", "large": "2rem"},
        "grid": {"columns": 12, "gap": "1rem"},
    },
    "interactions": {
        "animations": {"duration": "0.3s", "easing": "ease-in-out"},
        "transitions": {"fade": True, "slide": True},
    },
    "progressiveDisclosure": {
        "initialView": ["calendar", "tasks"],
        "secondaryView": ["health", "finance"],
        "tertiaryView": ["projects", "social"],
    },
}


class UIAdvisor:
    """Asks the gateway for dashboard UI advice; falls back to fixed defaults on any failure."""

    def __init__(self, gateway: GatewayService):
        self.gateway = gateway
        self.recommendations: Optional[Dict[str, Any]] = None

    async def get_ui_recommendations(self) -> Dict[str, Any]:
        temperature, max_tokens = UI_RECOMMENDATIONS_PRESET
        try:
            text = await self.gateway.generate_response(
                UI_RECOMMENDATIONS_PROMPT, {"temperature": temperature, "max_tokens": max_tokens}
            )
            parsed = json.loads(text)
        except (GatewayError, json.JSONDecodeError) as e:
            logger.warning("ui_advisor:fallback reason=%s", type(e).__name__)
            return self.default_recommendations()
        if not isinstance(parsed, dict):
            logger.warning("ui_advisor:fallback reason=not_an_object")
            return self.default_recommendations()
        self.recommendations = parsed
        return parsed

    @staticmethod
    def default_recommendations() -> Dict[str, Any]:
        return copy.deepcopy(DEFAULT_UI_RECOMMENDATIONS)
