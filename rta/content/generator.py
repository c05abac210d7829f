"""Ad content generation: business context + review insights → ad copy, marketing copy, image ad."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import ValidationError as PydanticValidationError

from rta.errors import ResponseParseError
from rta.llm.base import LLMProvider
from rta.prompts import render_prompt
from rta.schemas.models import (
    AdCopy,
    FormData,
    ImageAd,
    Insights,
    Outputs,
    PlainCopy,
    ReviewSupport,
    StructuredCopy,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a marketing copywriter who creates authentic ad content based on real "
    "customer reviews. Never invent claims not supported by reviews."
)
TEMPERATURE = 0.7

CopyFormat = Literal["structured", "plain"]

_OVERRIDDEN_AD_COPY_KEYS = ("cta", "reviewSupport", "review_support")


def build_content_prompt(form: FormData, insights: Insights, copy_format: CopyFormat = "structured") -> str:
    return render_prompt(
        "content.j2",
        form=form,
        insights=insights,
        tone=", ".join(form.brand_tone) or "Professional",
        platforms=", ".join(form.advertising_platform),
        cta=form.primary_cta,
        copy_format=copy_format,
    )


def _parse_marketing_copy(raw: Any, copy_format: CopyFormat) -> PlainCopy | StructuredCopy:
    if copy_format == "plain":
        if not isinstance(raw, str):
            raise ResponseParseError("Failed to parse AI response: marketingCopy must be a string")
        return PlainCopy(text=raw.strip())
    if not isinstance(raw, dict):
        raise ResponseParseError("Failed to parse AI response: marketingCopy must be an object")
    return StructuredCopy.model_validate({**raw, "kind": "structured"})


def parse_outputs(data: dict[str, Any], copy_format: CopyFormat = "structured") -> Outputs:
    """Build Outputs from the model's JSON; missing or mis-shaped sections are parse errors."""
    ad_copy_raw = data.get("json")
    if not isinstance(ad_copy_raw, dict):
        raise ResponseParseError("Failed to parse AI response: missing 'json' ad copy section")
    # Overwritten in apply_form_overrides; never validated
    ad_copy_raw = {k: v for k, v in ad_copy_raw.items() if k not in _OVERRIDDEN_AD_COPY_KEYS}
    marketing_raw = data.get("marketingCopy", data.get("marketing_copy"))
    image_raw = data.get("imageAd", data.get("image_ad"))
    try:
        return Outputs(
            ad_copy=AdCopy.model_validate(ad_copy_raw),
            marketing_copy=_parse_marketing_copy(marketing_raw, copy_format),
            image_ad=(
                ImageAd.model_validate(
                    {k: v for k, v in image_raw.items() if k not in ("cta", "imageUrl", "image_url")}
                )
                if isinstance(image_raw, dict)
                else None
            ),
        )
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ResponseParseError(f"Failed to parse AI response: invalid fields ({fields})") from e


def apply_form_overrides(outputs: Outputs, form: FormData, insights: Insights) -> Outputs:
    """Force the user's CTA and the locally computed review support onto the outputs."""
    cta = form.primary_cta
    outputs.ad_copy.cta = cta
    outputs.ad_copy.review_support = ReviewSupport.from_review_count(insights.review_count)
    if outputs.image_ad is not None:
        outputs.image_ad.cta = cta
    return outputs


def generate_content(
    form: FormData,
    insights: Insights,
    llm: LLMProvider,
    copy_format: CopyFormat = "structured",
) -> Outputs:
    """Run LLM call #2 and return post-processed Outputs."""
    prompt = build_content_prompt(form, insights, copy_format)
    data = llm.complete_json(prompt, system=SYSTEM_PROMPT, temperature=TEMPERATURE)
    outputs = apply_form_overrides(parse_outputs(data, copy_format), form, insights)
    logger.info(
        "Generated content: %d headlines, marketing copy=%s, image ad=%s",
        len(outputs.ad_copy.headlines),
        outputs.marketing_copy.kind,
        outputs.image_ad is not None,
    )
    return outputs
