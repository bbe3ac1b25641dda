from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class HuggingFaceProvider(HTTPProvider):
    """Hugging Face inference API, text-generation task."""

    name = "huggingface"

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        payload = {
            "inputs": prompt,
            "parameters": {
                "temperature": self._temperature(options),
                "max_length": self._max_tokens(options),
            },
        }
        data = await self._post_json(f"models/{self._model(options)}", payload)
        return str(self._extract(data, 0, "generated_text"))
