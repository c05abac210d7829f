"""Job orchestration: reviews → insights → content → optional image, with job state updates.

The whole chain runs inline in ``submit``; each stage blocks on its network
call. Any stage failure ends the job in ``error`` with a readable message
and discards partial results.
"""

from __future__ import annotations

import logging

from rta.config import Settings, get_settings
from rta.content.generator import generate_content
from rta.errors import MissingReviewSource, RTAError
from rta.images.synthesizer import ImageSynthesizer
from rta.insights.extractor import extract_insights
from rta.jobs.models import Job, JobStage, JobStatus
from rta.jobs.store import JobStore, _new_job_id
from rta.llm import LLMProvider, resolve_llm
from rta.reviews.normalizer import normalize_reviews, require_min_reviews
from rta.reviews.place_resolver import PlaceResolver
from rta.schemas.models import FormData, Insights, Outputs

logger = logging.getLogger(__name__)

MAX_ERROR_CHARS = 300


class JobOrchestrator:
    """Runs one submitted form through the pipeline and records its state in ``store``.

    Collaborators not passed in are built from ``settings`` when the stage
    that needs them runs, so a missing credential fails that stage (and the
    job) rather than the submission.
    """

    def __init__(
        self,
        store: JobStore,
        settings: Settings | None = None,
        llm: LLMProvider | None = None,
        images: ImageSynthesizer | None = None,
        places: PlaceResolver | None = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self._llm = llm
        self._images = images
        self._places = places

    # -- collaborators ------------------------------------------------------

    def _get_llm(self) -> LLMProvider:
        if self._llm is None:
            self._llm = resolve_llm(self.settings)
        return self._llm

    def _get_images(self) -> ImageSynthesizer:
        if self._images is None:
            self._images = ImageSynthesizer(
                api_key=self.settings.huggingface_api_key,
                models=self.settings.image_model_list,
                base_url=self.settings.rta_hf_base_url,
                timeout=self.settings.rta_http_timeout,
            )
        return self._images

    def _get_places(self) -> PlaceResolver:
        if self._places is None:
            self._places = PlaceResolver(
                api_key=self.settings.google_places_api_key,
                max_reviews=self.settings.rta_max_place_reviews,
                timeout=self.settings.rta_http_timeout,
            )
        return self._places

    # -- public API ---------------------------------------------------------

    def create(self, form: FormData) -> Job:
        job = Job(id=_new_job_id(), form_data=form, status=JobStatus.PROCESSING)
        self.store.put(job)
        logger.info("Created job %s", job.id)
        return job

    def submit(self, form: FormData) -> Job:
        """Create a job, run the full pipeline inline and return the terminal record."""
        job = self.create(form)
        return self.run(job.id, form)

    def get(self, job_id: str) -> Job | None:
        return self.store.get(job_id)

    def run(self, job_id: str, form: FormData) -> Job:
        try:
            self._enter(job_id, JobStage.REVIEWS)
            reviews = require_min_reviews(self._collect_reviews(form))

            self._enter(job_id, JobStage.INSIGHTS)
            insights = extract_insights(reviews, self._get_llm())

            self._enter(job_id, JobStage.CONTENT)
            outputs = generate_content(
                form, insights, self._get_llm(), copy_format=self._copy_format()
            )

            if self.settings.rta_enable_images and outputs.image_ad is not None:
                self._enter(job_id, JobStage.IMAGE)
                outputs.image_ad.image_url = self._get_images().generate(form, insights, outputs.image_ad)
        except RTAError as e:
            return self._fail(job_id, str(e))
        except Exception as e:
            logger.exception("Job %s failed with an unexpected error", job_id)
            return self._fail(job_id, str(e)[:MAX_ERROR_CHARS] or type(e).__name__)
        return self._complete(job_id, insights, outputs)

    # -- stages -------------------------------------------------------------

    def _collect_reviews(self, form: FormData) -> list[str]:
        if self.settings.uses_maps_link:
            if not form.maps_link or not form.maps_link.strip():
                raise MissingReviewSource("No Maps link provided")
            places = self._get_places()
            place_id = places.resolve(form.maps_link.strip())
            return normalize_reviews(places.fetch_reviews(place_id))
        if not form.reviews or not form.reviews.strip():
            raise MissingReviewSource("No reviews provided")
        return normalize_reviews(form.reviews)

    def _copy_format(self) -> str:
        fmt = self.settings.rta_marketing_copy_format.strip().lower()
        return "plain" if fmt == "plain" else "structured"

    # -- state transitions --------------------------------------------------

    def _enter(self, job_id: str, stage: JobStage) -> None:
        logger.info("Job %s: %s", job_id, stage.value)

        def mutate(job: Job) -> None:
            job.stage = stage

        self.store.update(job_id, mutate)

    def _complete(self, job_id: str, insights: Insights, outputs: Outputs) -> Job:
        def mutate(job: Job) -> None:
            job.status = JobStatus.COMPLETED
            job.stage = None
            job.insights = insights
            job.outputs = outputs
            job.error = None

        logger.info("Job %s completed", job_id)
        return self.store.update(job_id, mutate)

    def _fail(self, job_id: str, message: str) -> Job:
        def mutate(job: Job) -> None:
            job.status = JobStatus.ERROR
            job.insights = None
            job.outputs = None
            job.error = message

        logger.warning("Job %s failed: %s", job_id, message)
        return self.store.update(job_id, mutate)
