"""Tests for content generation: CTA override, review support, marketing copy variants."""

import pytest

from conftest import FakeLLM, content_payload
from rta.content.generator import build_content_prompt, generate_content, parse_outputs
from rta.errors import ResponseParseError
from rta.schemas.models import Insights, PlainCopy, StructuredCopy


@pytest.fixture
def insights() -> Insights:
    return Insights(
        key_benefits=["punctual team"],
        trust_signals=["highly recommend"],
        important_keywords=["cleaning"],
        customer_emotions=["relief"],
        review_count=10,
    )


def test_cta_is_forced_to_first_preferred_cta(form_data, insights):
    llm = FakeLLM([content_payload(cta="Buy this amazing thing NOW")])
    outputs = generate_content(form_data, insights, llm)
    assert outputs.ad_copy.cta == "Book now"
    assert outputs.image_ad is not None
    assert outputs.image_ad.cta == "Book now"


def test_cta_set_even_when_missing_from_response(form_data, insights):
    payload = content_payload()
    del payload["json"]["cta"]
    del payload["imageAd"]["cta"]
    outputs = generate_content(form_data, insights, FakeLLM([payload]))
    assert outputs.ad_copy.cta == form_data.preferred_cta[0]
    assert outputs.image_ad.cta == form_data.preferred_cta[0]


def test_review_support_is_derived_from_review_count(form_data, insights):
    outputs = generate_content(form_data, insights, FakeLLM([content_payload()]))
    assert outputs.ad_copy.review_support.benefit1 == 10
    assert outputs.ad_copy.review_support.benefit2 == 8


def test_structured_marketing_copy(form_data, insights):
    outputs = generate_content(form_data, insights, FakeLLM([content_payload()]))
    copy = outputs.marketing_copy
    assert isinstance(copy, StructuredCopy)
    assert copy.kind == "structured"
    assert copy.campaign_summary.key_emotion == "trust"
    assert copy.value_points == ["Punctual", "Professional"]


def test_plain_marketing_copy(form_data, insights):
    payload = content_payload(marketingCopy="  Customers love our punctual team.  ")
    llm = FakeLLM([payload])
    outputs = generate_content(form_data, insights, llm, copy_format="plain")
    assert isinstance(outputs.marketing_copy, PlainCopy)
    assert outputs.marketing_copy.text == "Customers love our punctual team."
    assert '"marketingCopy": "Two or three' in llm.calls[0]["prompt"]


def test_marketing_copy_shape_mismatch_is_parse_error(form_data, insights):
    with pytest.raises(ResponseParseError):
        generate_content(form_data, insights, FakeLLM([content_payload(marketingCopy="just text")]))


def test_missing_ad_copy_section_is_parse_error():
    payload = content_payload()
    del payload["json"]
    with pytest.raises(ResponseParseError):
        parse_outputs(payload)


def test_image_ad_is_optional(form_data, insights):
    payload = content_payload()
    del payload["imageAd"]
    outputs = generate_content(form_data, insights, FakeLLM([payload]))
    assert outputs.image_ad is None


def test_prompt_embeds_context_and_rules(form_data, insights):
    prompt = build_content_prompt(form_data, insights)
    assert "Name: Sparkle Cleaners" in prompt
    assert "Brand Tone: Friendly, Professional" in prompt
    assert "Advertising Platforms: Instagram / Facebook" in prompt
    assert "Key Benefits: punctual team" in prompt
    assert "Do NOT invent benefits" in prompt
    assert '"cta": "Book now"' in prompt


def test_empty_insight_fields_render_as_na(form_data):
    prompt = build_content_prompt(form_data, Insights(review_count=3))
    assert "Trust Signals: N/A" in prompt


def test_serialized_outputs_use_wire_names(form_data, insights):
    outputs = generate_content(form_data, insights, FakeLLM([content_payload()]))
    data = outputs.model_dump(mode="json", by_alias=True)
    assert data["json"]["cta"] == "Book now"
    assert data["json"]["reviewSupport"] == {"benefit1": 10, "benefit2": 8}
    assert data["imageAd"]["designStyle"] == "clean, minimal, professional"
    assert data["marketingCopy"]["kind"] == "structured"


def test_null_text_fields_are_blank(form_data, insights):
    payload = content_payload()
    payload["imageAd"]["headline"] = None
    payload["marketingCopy"]["social_proof"] = None
    outputs = generate_content(form_data, insights, FakeLLM([payload]))
    assert outputs.image_ad.headline == ""
    assert outputs.marketing_copy.social_proof == ""


def test_list_text_fields_are_joined(form_data, insights):
    payload = content_payload()
    payload["marketingCopy"]["campaign_summary"]["key_emotion"] = ["trust", "relief"]
    payload["imageAd"]["subheadline"] = ["On time", "Every time"]
    outputs = generate_content(form_data, insights, FakeLLM([payload]))
    assert outputs.marketing_copy.campaign_summary.key_emotion == "trust, relief"
    assert outputs.image_ad.subheadline == "On time, Every time"


def test_parse_error_names_invalid_field():
    payload = content_payload()
    payload["marketingCopy"]["campaign_summary"] = "not an object"
    with pytest.raises(ResponseParseError, match=r"invalid fields \(campaign_summary\)"):
        parse_outputs(payload)
