"""Ad image generation via Hugging Face inference, with fallback across candidate models."""

from __future__ import annotations

import base64
import logging
from typing import Callable, Iterable, TypeVar

import httpx

from rta.errors import ConfigError, ImageGenerationExhausted
from rta.prompts import render_prompt
from rta.schemas.models import FormData, ImageAd, Insights

logger = logging.getLogger(__name__)

C = TypeVar("C")
R = TypeVar("R")

# Substring of the brand tone (lowercased) -> mood phrase. First match wins.
TONE_MOODS: list[tuple[str, str]] = [
    ("professional", "calm, confident"),
    ("friendly", "warm, welcoming"),
    ("bold", "energetic, modern"),
    ("premium", "elegant, refined"),
]
DEFAULT_MOOD = "calm, confident"


class CandidateFailed(Exception):
    """One candidate did not produce a usable result."""


def mood_for_tone(tone: str) -> str:
    tone_lower = (tone or "").lower()
    for key, mood in TONE_MOODS:
        if key in tone_lower:
            return mood
    return DEFAULT_MOOD


def first_success(candidates: Iterable[C], attempt: Callable[[C], R]) -> tuple[C, R]:
    """
    Try ``attempt`` on each candidate in order and return the first success.

    ``CandidateFailed`` and ``httpx.HTTPError`` from an attempt move on to the
    next candidate; anything else propagates. When every candidate fails,
    raises ImageGenerationExhausted carrying each (candidate, reason).
    """
    failures: list[tuple[str, str]] = []
    for candidate in candidates:
        try:
            return candidate, attempt(candidate)
        except (CandidateFailed, httpx.HTTPError) as e:
            reason = str(e) or type(e).__name__
            logger.warning("Image candidate %s failed: %s", candidate, reason)
            failures.append((str(candidate), reason))
    raise ImageGenerationExhausted(failures)


def build_image_prompt(form: FormData, insights: Insights, image_ad: ImageAd) -> str:
    key_phrase = next(iter(insights.trust_signals or insights.key_benefits), "quality service")
    return render_prompt(
        "image_ad.j2",
        business_type=form.business_type[0] if form.business_type else "business",
        industry=", ".join(form.business_type) or "general",
        brand_tone=", ".join(form.brand_tone) or "Professional",
        platform=form.advertising_platform[0] if form.advertising_platform else "general",
        audience=", ".join(form.target_audience) or "general",
        key_phrase=key_phrase,
        mood=mood_for_tone(form.brand_tone[0] if form.brand_tone else ""),
        image_ad=image_ad,
    )


def _error_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        err = body["error"]
        if body.get("estimated_time") is not None:
            return f"{err} (estimated_time={body['estimated_time']}s)"
        return str(err)
    return f"HTTP {response.status_code}"


class ImageSynthesizer:
    """Text-to-image against an ordered list of candidate models."""

    def __init__(
        self,
        api_key: str | None,
        models: list[str],
        base_url: str = "https://router.huggingface.co/hf-inference/models",
        client: httpx.Client | None = None,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ConfigError("HUGGINGFACE_API_KEY environment variable is not set")
        self._api_key = api_key
        self._models = list(models)
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(follow_redirects=True, timeout=timeout)

    @property
    def models(self) -> list[str]:
        return list(self._models)

    def generate(self, form: FormData, insights: Insights, image_ad: ImageAd) -> str:
        """Return the first candidate's image as a ``data:`` URL."""
        prompt = build_image_prompt(form, insights, image_ad)
        model, data_url = first_success(self._models, lambda m: self._generate_with(m, prompt))
        logger.info("Generated ad image with %s", model)
        return data_url

    def _generate_with(self, model: str, prompt: str) -> str:
        response = self._client.post(
            f"{self._base_url}/{model}",
            headers={"Authorization": f"Bearer {self._api_key}", "Accept": "image/png"},
            json={"inputs": prompt},
        )
        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not response.is_success:
            raise CandidateFailed(_error_reason(response))
        if not content_type.startswith("image/"):
            raise CandidateFailed(f"{_error_reason(response)}: expected an image, got '{content_type or 'no content type'}'")
        if not response.content:
            raise CandidateFailed("empty image response")
        payload = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{payload}"
