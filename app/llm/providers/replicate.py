from typing import Dict

from app.llm.errors import MalformedResponseError
from app.llm.providers.base import HTTPProvider
from app.llm.types import GenerationOptions


class ReplicateProvider(HTTPProvider):
    name = "replicate"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Token {self.config.api_key}"
        return headers

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        inputs = {
            "prompt": prompt,
            "temperature": self._temperature(options),
            "max_tokens": self._max_tokens(options),
            **options.passthrough(),
        }
        payload = {"version": self._model(options), "input": inputs}
        data = await self._post_json("predictions", payload)
        output = self._extract(data, "output")
        if output is None:
            # prediction accepted but not finished yet
            raise MalformedResponseError(f"replicate prediction has no output (status={data.get('status')})")
        if isinstance(output, list):
            return "".join(str(part) for part in output)
        return str(output)
