from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class CohereProvider(HTTPProvider):
    name = "cohere"

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        payload = {
            "prompt": prompt,
            "max_tokens": self._max_tokens(options),
            "temperature": self._temperature(options),
            "model": self._model(options),
        }
        data = await self._post_json("generate", payload)
        return str(self._extract(data, "generations", 0, "text"))
