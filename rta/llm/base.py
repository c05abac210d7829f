"""Abstract LLM provider protocol and shared JSON response handling."""

import json
import re
from typing import Any, Protocol

from rta.errors import ResponseParseError

JSON_ONLY_INSTRUCTION = "Respond with a single JSON object only. No markdown, no code fence, no explanation."


class LLMProvider(Protocol):
    """Protocol for LLM backends (Groq/OpenAI, Anthropic)."""

    name: str

    def complete(self, prompt: str, **kwargs: Any) -> str:
        """Return raw text completion. Accepts ``system``, ``temperature``, ``json_mode``."""
        ...

    def complete_json(self, prompt: str, **kwargs: Any) -> dict[str, Any]:
        """Return the completion parsed as a JSON object."""
        ...


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any.

    Text-generation services sometimes wrap JSON in markdown even when told
    not to, so every JSON response goes through here before parsing.
    """
    s = raw.strip()
    if s.startswith("```"):
        s = re.sub(r"^```\w*\n?", "", s)
        s = re.sub(r"\n?```\s*$", "", s)
    return s.strip()


def parse_json_object(raw: str, source: str = "AI") -> dict[str, Any]:
    """Fence-strip and parse; anything but a JSON object is a ResponseParseError."""
    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse {source} response as JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise ResponseParseError(f"Failed to parse {source} response as JSON: expected an object")
    return data
