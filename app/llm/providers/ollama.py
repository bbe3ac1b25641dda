from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class OllamaProvider(HTTPProvider):
    """Local Ollama server. No credentials."""

    name = "ollama"

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        payload = {
            "model": self._model(options),
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self._temperature(options),
                "num_predict": self._max_tokens(options),
            },
        }
        data = await self._post_json("generate", payload)
        return str(self._extract(data, "response"))
