"""Review insight extraction: one structured LLM call over the normalized reviews."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from rta.errors import ResponseParseError
from rta.llm.base import LLMProvider
from rta.prompts import render_prompt
from rta.schemas.models import Insights

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a marketing insights analyst. Extract structured insights from customer "
    "reviews and return only valid JSON."
)
TEMPERATURE = 0.3


def extract_insights(reviews: list[str], llm: LLMProvider) -> Insights:
    """
    Ask the LLM for repeated phrases, benefits, trust signals, emotions and keywords.

    ``review_count`` on the result is always ``len(reviews)``; the model's own
    count is discarded.
    """
    prompt = render_prompt(
        "insights.j2",
        review_text="\n\n".join(reviews),
        review_count=len(reviews),
    )
    data = llm.complete_json(prompt, system=SYSTEM_PROMPT, temperature=TEMPERATURE)
    try:
        insights = Insights.model_validate(data)
    except PydanticValidationError as e:
        raise ResponseParseError(f"Failed to parse AI response as insights: {e.error_count()} invalid fields") from e
    insights.review_count = len(reviews)
    logger.info(
        "Extracted insights: %d benefits, %d trust signals from %d reviews",
        len(insights.key_benefits),
        len(insights.trust_signals),
        insights.review_count,
    )
    return insights
