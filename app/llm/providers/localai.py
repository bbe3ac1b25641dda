from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class LocalAIProvider(HTTPProvider):
    """LocalAI speaks the OpenAI chat-completions dialect on a local port."""

    name = "localai"

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        payload = {
            "model": self._model(options),
            "messages": [
                {"role": "system", "content": self._system_prompt(options)},
                {"role": "user", "content": prompt},
            ],
            "temperature": self._temperature(options),
            "max_tokens": self._max_tokens(options),
        }
        data = await self._post_json("chat/completions", payload)
        return str(self._extract(data, "choices", 0, "message", "content"))
