"""Pipeline job schema and status."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from rta.schemas.models import CamelModel, FormData, Insights, Outputs


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class JobStage(str, Enum):
    REVIEWS = "reviews"
    INSIGHTS = "insights"
    CONTENT = "content"
    IMAGE = "image"


class Job(CamelModel):
    """One end-to-end processing attempt for a single form submission."""

    id: str
    form_data: FormData
    status: JobStatus = JobStatus.PROCESSING
    stage: JobStage | None = None
    insights: Insights | None = None
    outputs: Outputs | None = None
    error: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
