"""Anthropic LLM implementation with JSON output via prompt instruction."""

from typing import Any

import httpx
from anthropic import Anthropic, APIError

from rta.errors import UpstreamCallError
from rta.llm.base import JSON_ONLY_INSTRUCTION, parse_json_object


class AnthropicProvider:
    """Anthropic messages API with optional structured (JSON) output."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-sonnet-20241022",
        timeout: float = 60.0,
        max_retries: int = 0,
        http_client: httpx.Client | None = None,
    ):
        self._client = Anthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client,
        )
        self._model = model
        self.name = "Anthropic"

    def complete(self, prompt: str, **kwargs: Any) -> str:
        params: dict[str, Any] = {
            "model": kwargs.get("model") or self._model,
            "max_tokens": kwargs.get("max_tokens", 4096),
            "messages": [{"role": "user", "content": prompt}],
        }
        if kwargs.get("system"):
            params["system"] = kwargs["system"]
        if kwargs.get("temperature") is not None:
            params["temperature"] = kwargs["temperature"]
        try:
            response = self._client.messages.create(**params)
        except APIError as e:
            raise UpstreamCallError(f"Anthropic API error: {e.message}") from e
        text = response.content[0].text if response.content else ""
        if not text:
            raise UpstreamCallError("No content returned from Anthropic")
        return text

    def complete_json(self, prompt: str, **kwargs: Any) -> dict[str, Any]:
        kwargs.pop("json_mode", None)
        raw = self.complete(f"{prompt}\n\n{JSON_ONLY_INSTRUCTION}", **kwargs)
        return parse_json_object(raw)
