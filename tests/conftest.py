"""Pytest configuration and shared fixtures.

External services are never called: the LLM is a scripted fake and HTTP
collaborators run on ``httpx.MockTransport``.
"""

import json
from typing import Any

import httpx
import pytest

from rta.config import Settings
from rta.jobs import InMemoryJobStore
from rta.llm.base import parse_json_object
from rta.schemas.models import FormData

SAMPLE_REVIEWS = """Amazing service! The team was professional and on time.
Best experience I've had. Highly recommend to anyone.
Fast, reliable, and affordable. Will return!
Amazing service! The team was professional and on time.

Friendly staff who exceeded expectations."""

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class FakeLLM:
    """Scripted LLMProvider: returns queued raw responses (or raises queued exceptions)."""

    name = "Fake"

    def __init__(self, responses: list[Any]):
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def complete(self, prompt: str, **kwargs: Any) -> str:
        self.calls.append({"prompt": prompt, **kwargs})
        if not self._responses:
            raise AssertionError("FakeLLM ran out of scripted responses")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, (dict, list)):
            return json.dumps(item)
        return item

    def complete_json(self, prompt: str, **kwargs: Any) -> dict[str, Any]:
        return parse_json_object(self.complete(prompt, json_mode=True, **kwargs))


def insights_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "repeatedPhrases": ["amazing service", "on time"],
        "keyBenefits": ["professional team", "fast and reliable"],
        "trustSignals": ["highly recommend", "will return"],
        "customerEmotions": ["delight", "trust"],
        "importantKeywords": ["service", "team", "affordable"],
        "reviewCount": 99,
    }
    data.update(overrides)
    return data


def content_payload(cta: str = "Call us today", **overrides: Any) -> dict[str, Any]:
    data = {
        "json": {
            "headlines": ["Service customers call amazing", "On time, every time"],
            "bodyCopy": ["Customers highly recommend our professional team."],
            "cta": cta,
            "proofPhrases": ["highly recommend", "will return"],
            "reviewSupport": {"benefit1": 1000, "benefit2": 900},
        },
        "marketingCopy": {
            "campaign_summary": {
                "campaign_objective": "More leads",
                "target_audience": "Families",
                "key_emotion": "trust",
                "proof_source": "customer reviews",
            },
            "headlines": ["Trusted by families"],
            "subheadline": "A professional team that shows up on time.",
            "core_copy": "Customers often highlight our punctual, professional team.",
            "value_points": ["Punctual", "Professional"],
            "social_proof": "Customers often highlight our reliability.",
            "ctas": ["Book a visit"],
        },
        "imageAd": {
            "headline": "On time, every time",
            "subheadline": "The team customers recommend",
            "cta": cta,
            "designStyle": "clean, minimal, professional",
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def form_data() -> FormData:
    return FormData(
        business_name="Sparkle Cleaners",
        business_type=["Service Provider"],
        marketing_goal=["More leads"],
        target_audience=["Families", "Working professionals"],
        advertising_platform=["Instagram / Facebook"],
        brand_tone=["Friendly", "Professional"],
        preferred_cta=["Book now", "Call now"],
        reviews=SAMPLE_REVIEWS,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        rta_llm_provider="groq",
        groq_api_key="test-groq-key",
        huggingface_api_key="test-hf-key",
        google_places_api_key="test-places-key",
        rta_enable_images=False,
        rta_review_source="manual",
    )


@pytest.fixture
def store() -> InMemoryJobStore:
    return InMemoryJobStore()


def image_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))
