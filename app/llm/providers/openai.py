import logging
import time
from typing import Any, Optional

from app.llm.errors import MalformedResponseError
from app.llm.types import GenerationOptions, ProviderSettings

logger = logging.getLogger("uvicorn.error")


class OpenAIProvider:
    name = "openai"

    def __init__(self, config: ProviderSettings, client: Optional[Any] = None):
        self.config = config
        self.client = client

    def _client(self):
        if self.client is None:
            from openai import AsyncOpenAI

            self.client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout_s,
            )
        return self.client

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        model = options.model or self.config.default_model
        system = str(options.context.get("systemPrompt") or self.config.system_prompt)
        start = time.perf_counter()
        logger.info("llm:openai request model=%s", model)
        resp = await self._client().chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=options.temperature if options.temperature is not None else self.config.temperature,
            max_tokens=options.max_tokens if options.max_tokens is not None else self.config.max_tokens,
        )
        latency_ms = int((time.perf_counter() - start) * 1000)
        tokens_out = getattr(resp.usage, "completion_tokens", 0) if resp.usage else 0
        logger.info("llm:openai response model=%s latency_ms=%s tokens_out=%s", model, latency_ms, tokens_out)
        if not resp.choices or resp.choices[0].message.content is None:
            raise MalformedResponseError("openai: response has no message content")
        return resp.choices[0].message.content

    async def aclose(self) -> None:
        if self.client is not None and hasattr(self.client, "close"):
            await self.client.close()
