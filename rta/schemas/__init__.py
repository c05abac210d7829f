"""Pydantic models: single source of truth for all data shapes."""

from rta.schemas.models import (
    FORM_OPTIONS,
    AdCopy,
    CampaignSummary,
    FormData,
    ImageAd,
    Insights,
    MarketingCopy,
    Outputs,
    PlainCopy,
    ReviewSupport,
    StructuredCopy,
)

__all__ = [
    "FORM_OPTIONS",
    "AdCopy",
    "CampaignSummary",
    "FormData",
    "ImageAd",
    "Insights",
    "MarketingCopy",
    "Outputs",
    "PlainCopy",
    "ReviewSupport",
    "StructuredCopy",
]
