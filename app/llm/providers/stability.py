from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class StabilityProvider(HTTPProvider):
    """Text-to-image. The "text" returned is the first artifact as base64."""

    name = "stability"

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        extra = options.passthrough()
        payload = {
            "text_prompts": [{"text": prompt}],
            "cfg_scale": extra.get("cfgScale", self.config.cfg_scale),
            "height": extra.get("height", self.config.height),
            "width": extra.get("width", self.config.width),
            "steps": extra.get("steps", self.config.steps),
        }
        data = await self._post_json(f"generation/{self._model(options)}/text-to-image", payload)
        return str(self._extract(data, "artifacts", 0, "base64"))
