"""Pipeline job storage and retrieval."""

from rta.jobs.models import Job, JobStage, JobStatus
from rta.jobs.store import InMemoryJobStore, JobStore, get_job_store, _new_job_id

__all__ = ["Job", "JobStage", "JobStatus", "InMemoryJobStore", "JobStore", "get_job_store", "_new_job_id"]
