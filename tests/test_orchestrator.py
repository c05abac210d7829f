"""Tests for the job orchestrator: stage sequencing, terminal states, error conversion."""

import httpx
import pytest

from conftest import PNG_BYTES, FakeLLM, content_payload, image_client, insights_payload
from rta.errors import UpstreamCallError
from rta.images.synthesizer import ImageSynthesizer
from rta.jobs import JobStatus
from rta.pipeline import JobOrchestrator
from rta.reviews.place_resolver import PlaceResolver
from rta.schemas.models import StructuredCopy

CANONICAL_ID = "ChIJN1t_tDeuEmsRUsoyG83frY4"


def _ok_llm() -> FakeLLM:
    return FakeLLM([insights_payload(reviewCount=77), content_payload(cta="Something else")])


def test_completed_job_has_insights_outputs_and_forced_cta(store, settings, form_data):
    orch = JobOrchestrator(store, settings, llm=_ok_llm())
    job = orch.submit(form_data)

    assert job.status == JobStatus.COMPLETED
    assert job.error is None
    # SAMPLE_REVIEWS has 5 non-empty lines, one duplicate
    assert job.insights.review_count == 4
    assert job.outputs.ad_copy.cta == form_data.preferred_cta[0]
    assert job.outputs.image_ad.cta == form_data.preferred_cta[0]
    assert isinstance(job.outputs.marketing_copy, StructuredCopy)
    assert job.outputs.image_ad.image_url is None  # images disabled in fixture
    assert store.get(job.id).status == JobStatus.COMPLETED


def test_insight_call_receives_normalized_reviews(store, settings, form_data):
    llm = _ok_llm()
    JobOrchestrator(store, settings, llm=llm).submit(form_data)
    prompt = llm.calls[0]["prompt"]
    assert prompt.count("Amazing service! The team was professional and on time.") == 1
    assert len(llm.calls) == 2


def test_insufficient_reviews_yields_error_job(store, settings, form_data):
    form = form_data.model_copy(update={"reviews": "Great service!\ngreat service!\n\n"})
    llm = FakeLLM([])
    job = JobOrchestrator(store, settings, llm=llm).submit(form)
    assert job.status == JobStatus.ERROR
    assert "At least 3 reviews are required" in job.error
    assert job.insights is None and job.outputs is None
    assert llm.calls == []


def test_missing_reviews_yields_error_job(store, settings, form_data):
    form = form_data.model_copy(update={"reviews": "   "})
    job = JobOrchestrator(store, settings, llm=FakeLLM([])).submit(form)
    assert job.status == JobStatus.ERROR
    assert job.error == "No reviews provided"


def test_missing_llm_credential_is_reported_on_job(store, settings, form_data):
    settings.groq_api_key = None
    job = JobOrchestrator(store, settings).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert "GROQ_API_KEY" in job.error


def test_upstream_failure_message_stored_verbatim(store, settings, form_data):
    llm = FakeLLM([insights_payload(), UpstreamCallError("Groq API error: model overloaded")])
    job = JobOrchestrator(store, settings, llm=llm).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert job.error == "Groq API error: model overloaded"
    assert job.insights is None


def test_parse_failure_is_error_state(store, settings, form_data):
    job = JobOrchestrator(store, settings, llm=FakeLLM(["not json at all"])).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert "Failed to parse" in job.error


def test_unexpected_exception_is_caught(store, settings, form_data):
    job = JobOrchestrator(store, settings, llm=FakeLLM([RuntimeError("kaboom")])).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert job.error == "kaboom"


def test_image_stage_attaches_data_url(store, settings, form_data):
    settings.rta_enable_images = True
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if len(calls) < 3:
            return httpx.Response(503, json={"error": "Model is currently loading"})
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

    images = ImageSynthesizer("k", ["a/1", "a/2", "a/3"], base_url="https://hf.test", client=image_client(handler))
    job = JobOrchestrator(store, settings, llm=_ok_llm(), images=images).submit(form_data)
    assert job.status == JobStatus.COMPLETED
    assert job.outputs.image_ad.image_url.startswith("data:image/png;base64,")
    assert len(calls) == 3


def test_image_exhaustion_fails_job(store, settings, form_data):
    settings.rta_enable_images = True

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "down"})

    images = ImageSynthesizer("k", ["a/1", "a/2"], base_url="https://hf.test", client=image_client(handler))
    job = JobOrchestrator(store, settings, llm=_ok_llm(), images=images).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert "Failed to generate image" in job.error
    assert job.outputs is None


def test_image_stage_skipped_without_image_ad(store, settings, form_data):
    settings.rta_enable_images = True
    payload = content_payload()
    del payload["imageAd"]
    llm = FakeLLM([insights_payload(), payload])
    job = JobOrchestrator(store, settings, llm=llm).submit(form_data)
    assert job.status == JobStatus.COMPLETED
    assert job.outputs.image_ad is None


def test_maps_link_mode_resolves_and_fetches(store, settings, form_data):
    settings.rta_review_source = "maps_link"
    requests: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.url.path)
        reviews = [{"text": t} for t in ("Great", "Great", "Clean rooms", "Kind staff", "")]
        return httpx.Response(200, json={"status": "OK", "result": {"reviews": reviews}})

    places = PlaceResolver("k", client=httpx.Client(transport=httpx.MockTransport(handler)))
    form = form_data.model_copy(
        update={"reviews": None, "maps_link": f"https://maps.google.com/?place_id={CANONICAL_ID}"}
    )
    job = JobOrchestrator(store, settings, llm=_ok_llm(), places=places).submit(form)
    assert job.status == JobStatus.COMPLETED
    assert job.insights.review_count == 3
    assert requests == ["/maps/api/place/details/json"]


def test_maps_link_mode_requires_link(store, settings, form_data):
    settings.rta_review_source = "maps_link"
    job = JobOrchestrator(store, settings, llm=FakeLLM([])).submit(form_data)
    assert job.status == JobStatus.ERROR
    assert job.error == "No Maps link provided"


def test_stage_progress_is_recorded(store, settings, form_data):
    seen_stages: list[str] = []
    orch = JobOrchestrator(store, settings, llm=_ok_llm())
    original_update = store.update

    def spying_update(job_id, mutate):
        job = original_update(job_id, mutate)
        if job.stage is not None:
            seen_stages.append(job.stage.value)
        return job

    store.update = spying_update
    job = orch.submit(form_data)
    assert seen_stages == ["reviews", "insights", "content"]
    assert job.stage is None


def test_get_unknown_job(store, settings):
    assert JobOrchestrator(store, settings, llm=FakeLLM([])).get("job_nope") is None


@pytest.mark.parametrize("fmt", ["plain", "PLAIN"])
def test_plain_copy_format_from_settings(store, settings, form_data, fmt):
    settings.rta_marketing_copy_format = fmt
    llm = FakeLLM([insights_payload(), content_payload(marketingCopy="Short copy.")])
    job = JobOrchestrator(store, settings, llm=llm).submit(form_data)
    assert job.status == JobStatus.COMPLETED
    assert job.outputs.marketing_copy.kind == "plain"


def test_loosely_typed_copy_fields_still_complete(store, settings, form_data):
    content = content_payload()
    content["imageAd"]["headline"] = None
    content["marketingCopy"]["campaign_summary"]["key_emotion"] = ["trust", "relief"]
    llm = FakeLLM([insights_payload(), content])
    job = JobOrchestrator(store, settings, llm=llm).submit(form_data)

    assert job.status == JobStatus.COMPLETED
    assert job.outputs.image_ad.headline == ""
    assert job.outputs.marketing_copy.campaign_summary.key_emotion == "trust, relief"
