"""Questionnaire processing API: submit once, poll by job id.

POST /api/process
  → Creates a job, runs the full pipeline inline, returns the terminal job record.

GET /api/process?id={job_id}  and  GET /api/jobs/{job_id}
  → Returns the current job record (404 if unknown).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from rta.config import get_settings
from rta.jobs import Job, JobStatus, get_job_store
from rta.pipeline import JobOrchestrator
from rta.report import render_job_markdown
from rta.schemas.models import FORM_OPTIONS, FormData

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

_orchestrator: JobOrchestrator | None = None


def get_orchestrator() -> JobOrchestrator:
    """Process-wide orchestrator bound to the shared job store."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = JobOrchestrator(get_job_store(), settings)
    return _orchestrator


def _require_job(orchestrator: JobOrchestrator, job_id: str) -> Job:
    job = orchestrator.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/process",
    response_model=Job,
    summary="Submit questionnaire and generate ad content",
    description=(
        "Runs review preprocessing, insight extraction, content generation and (optionally) "
        "image generation inline. The response carries the terminal status: 'completed' with "
        "outputs, or 'error' with a message."
    ),
)
def submit_questionnaire(
    form: FormData,
    orchestrator: JobOrchestrator = Depends(get_orchestrator),
):
    """Create a job for the submission and run it to completion."""
    if orchestrator.settings.rta_strict_options:
        unknown = form.unknown_options()
        if unknown:
            detail = "; ".join(f"{field}: {', '.join(values)}" for field, values in unknown.items())
            raise HTTPException(
                status_code=422,
                detail=f"Unknown option values ({detail})",
            )
    return orchestrator.submit(form)


@router.get(
    "/process",
    response_model=Job,
    summary="Poll job by query parameter",
    responses={400: {"description": "Missing id parameter"}, 404: {"description": "Job not found"}},
)
def poll_job_query(
    id: Optional[str] = Query(None, description="Job id returned by POST /api/process"),
    orchestrator: JobOrchestrator = Depends(get_orchestrator),
):
    if not id:
        raise HTTPException(status_code=400, detail="Missing id parameter")
    return _require_job(orchestrator, id)


@router.get(
    "/jobs/{job_id}",
    response_model=Job,
    summary="Get job status and results",
    responses={404: {"description": "Job not found"}},
)
def get_job(job_id: str, orchestrator: JobOrchestrator = Depends(get_orchestrator)):
    return _require_job(orchestrator, job_id)


@router.get(
    "/jobs/{job_id}/report",
    summary="Export completed job as Markdown",
    responses={404: {"description": "Job not found"}, 409: {"description": "Job not completed"}},
)
def get_job_report(
    job_id: str,
    include_image: bool = True,
    orchestrator: JobOrchestrator = Depends(get_orchestrator),
):
    job = _require_job(orchestrator, job_id)
    if job.status != JobStatus.COMPLETED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Job is not completed (status={job.status.value})",
        )
    return Response(
        content=render_job_markdown(job, include_image=include_image),
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{job_id}.md"'},
    )


@router.get("/options", summary="Questionnaire option lists")
def get_options():
    """Allowed values for each categorical questionnaire field (camelCase keys)."""
    out = {FormData.model_fields[name].alias: values for name, values in FORM_OPTIONS.items()}
    return out
