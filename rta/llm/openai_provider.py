"""OpenAI-compatible chat completion (OpenAI itself, or Groq via base_url)."""

from typing import Any

import httpx
from openai import APIError, OpenAI

from rta.errors import UpstreamCallError
from rta.llm.base import JSON_ONLY_INSTRUCTION, parse_json_object


class OpenAIProvider:
    """Chat completion with optional JSON-object response format."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        name: str = "OpenAI",
        timeout: float = 60.0,
        max_retries: int = 0,
        http_client: httpx.Client | None = None,
    ):
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client,
        )
        self._model = model
        self.name = name

    def complete(self, prompt: str, **kwargs: Any) -> str:
        messages = []
        if kwargs.get("system"):
            messages.append({"role": "system", "content": kwargs["system"]})
        messages.append({"role": "user", "content": prompt})
        extra: dict[str, Any] = {}
        if kwargs.get("temperature") is not None:
            extra["temperature"] = kwargs["temperature"]
        if kwargs.get("json_mode"):
            extra["response_format"] = {"type": "json_object"}
        try:
            response = self._client.chat.completions.create(
                model=kwargs.get("model") or self._model,
                messages=messages,
                **extra,
            )
        except APIError as e:
            raise UpstreamCallError(f"{self.name} API error: {e.message}") from e
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamCallError(f"No content returned from {self.name}")
        return content

    def complete_json(self, prompt: str, **kwargs: Any) -> dict[str, Any]:
        raw = self.complete(f"{prompt}\n\n{JSON_ONLY_INSTRUCTION}", json_mode=True, **kwargs)
        return parse_json_object(raw)
