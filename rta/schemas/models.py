"""Pydantic models: single source of truth for FormData, Insights and the generated Outputs.

Wire names are camelCase (``businessName``, ``reviewCount``, ``imageAd``);
Python attributes are snake_case. Both spellings are accepted on input.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Questionnaire option lists
# ---------------------------------------------------------------------------

BUSINESS_TYPE_OPTIONS = [
    "Local Business",
    "Service Provider",
    "Restaurant / Cafe",
    "E-commerce / D2C",
    "Personal Brand",
]
MARKETING_GOAL_OPTIONS = ["More leads", "More sales", "Brand awareness", "Social media growth"]
TARGET_AUDIENCE_OPTIONS = ["Students", "Working professionals", "Business owners", "Families", "Everyone"]
ADVERTISING_PLATFORM_OPTIONS = [
    "Instagram / Facebook",
    "Google Ads",
    "Website / Landing Page",
    "Marketplace Listing",
]
BRAND_TONE_OPTIONS = ["Professional", "Friendly", "Bold", "Premium"]
PREFERRED_CTA_OPTIONS = ["Call now", "Book now", "Order now", "Learn more"]

# attribute name -> allowed values
FORM_OPTIONS: dict[str, list[str]] = {
    "business_type": BUSINESS_TYPE_OPTIONS,
    "marketing_goal": MARKETING_GOAL_OPTIONS,
    "target_audience": TARGET_AUDIENCE_OPTIONS,
    "advertising_platform": ADVERTISING_PLATFORM_OPTIONS,
    "brand_tone": BRAND_TONE_OPTIONS,
    "preferred_cta": PREFERRED_CTA_OPTIONS,
}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _str_list(v: Any) -> list[str]:
    """Coerce LLM output into a list of non-empty strings."""
    if v is None:
        return []
    if isinstance(v, (str, int, float)):
        v = [v]
    if not isinstance(v, list):
        return []
    return [str(x).strip() for x in v if x is not None and str(x).strip()]


def _str_scalar(v: Any) -> str:
    """Coerce LLM output into a single string; lists are joined with ", "."""
    if v is None:
        return ""
    if isinstance(v, list):
        return ", ".join(_str_list(v))
    if isinstance(v, dict):
        return ", ".join(_str_list(list(v.values())))
    return str(v).strip()


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------

class FormData(CamelModel):
    """Questionnaire submission."""

    business_name: str
    business_type: list[str] = Field(default_factory=list)
    marketing_goal: list[str] = Field(default_factory=list)
    target_audience: list[str] = Field(default_factory=list)
    advertising_platform: list[str] = Field(default_factory=list)
    brand_tone: list[str] = Field(default_factory=list)
    preferred_cta: list[str] = Field(default_factory=list, alias="preferredCTA")
    reviews: str | None = None  # newline-delimited, manual mode
    maps_link: str | None = None  # link mode

    @field_validator("business_name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Business name is required")
        return v

    @model_validator(mode="after")
    def _selections_present(self) -> "FormData":
        missing = [name for name in FORM_OPTIONS if not getattr(self, name)]
        if missing:
            raise ValueError(
                "Please select at least one option for each field (missing: "
                + ", ".join(missing)
                + ")"
            )
        return self

    def unknown_options(self) -> dict[str, list[str]]:
        """Selections that are not in the questionnaire option lists, by field."""
        out: dict[str, list[str]] = {}
        for name, allowed in FORM_OPTIONS.items():
            bad = [v for v in getattr(self, name) if v not in allowed]
            if bad:
                out[name] = bad
        return out

    @property
    def primary_cta(self) -> str:
        return self.preferred_cta[0]


# ---------------------------------------------------------------------------
# Insights (LLM call #1)
# ---------------------------------------------------------------------------

class Insights(CamelModel):
    """Recurring language and themes mined from the reviews."""

    repeated_phrases: list[str] = Field(default_factory=list)
    key_benefits: list[str] = Field(default_factory=list)
    trust_signals: list[str] = Field(default_factory=list)
    customer_emotions: list[str] = Field(default_factory=list)
    important_keywords: list[str] = Field(default_factory=list)
    review_count: int = 0

    @field_validator(
        "repeated_phrases",
        "key_benefits",
        "trust_signals",
        "customer_emotions",
        "important_keywords",
        mode="before",
    )
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _str_list(v)

    @field_validator("review_count", mode="before")
    @classmethod
    def _coerce_count(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0


# ---------------------------------------------------------------------------
# Outputs (LLM call #2 + image)
# ---------------------------------------------------------------------------

class ReviewSupport(CamelModel):
    benefit1: int = 0
    benefit2: int = 0

    @classmethod
    def from_review_count(cls, review_count: int) -> "ReviewSupport":
        return cls(benefit1=review_count, benefit2=math.floor(review_count * 0.8))


class AdCopy(CamelModel):
    """Flat ad copy (wire name ``json`` inside Outputs)."""

    headlines: list[str] = Field(default_factory=list)
    body_copy: list[str] = Field(default_factory=list)
    cta: str = ""
    proof_phrases: list[str] = Field(default_factory=list)
    review_support: ReviewSupport = Field(default_factory=ReviewSupport)

    @field_validator("headlines", "body_copy", "proof_phrases", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _str_list(v)


class CampaignSummary(BaseModel):
    campaign_objective: str = ""
    target_audience: str = ""
    key_emotion: str = ""
    proof_source: str = "customer reviews"

    @field_validator("campaign_objective", "target_audience", "key_emotion", "proof_source", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _str_scalar(v)


class PlainCopy(BaseModel):
    """Marketing copy as a single block of text."""

    kind: Literal["plain"] = "plain"
    text: str = ""


class StructuredCopy(BaseModel):
    """Marketing copy bundle for landing pages and long-form ads."""

    kind: Literal["structured"] = "structured"
    campaign_summary: CampaignSummary = Field(default_factory=CampaignSummary)
    headlines: list[str] = Field(default_factory=list)
    subheadline: str = ""
    core_copy: str = ""
    value_points: list[str] = Field(default_factory=list)
    social_proof: str = ""
    ctas: list[str] = Field(default_factory=list)

    @field_validator("headlines", "value_points", "ctas", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _str_list(v)

    @field_validator("subheadline", "core_copy", "social_proof", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _str_scalar(v)


MarketingCopy = Annotated[Union[PlainCopy, StructuredCopy], Field(discriminator="kind")]


class ImageAd(CamelModel):
    headline: str = ""
    subheadline: str = ""
    cta: str = ""
    design_style: str = "clean, minimal, professional"
    image_url: str | None = None  # data URL once the image stage has run

    @field_validator("headline", "subheadline", "design_style", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _str_scalar(v)


class Outputs(CamelModel):
    ad_copy: AdCopy = Field(alias="json")
    marketing_copy: MarketingCopy
    image_ad: ImageAd | None = None
