"""In-memory job storage for the lifetime of the process."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Protocol

from rta.jobs.models import Job

logger = logging.getLogger(__name__)


class JobStore(Protocol):
    def put(self, job: Job) -> Job: ...
    def get(self, job_id: str) -> Job | None: ...
    def update(self, job_id: str, mutate: Callable[[Job], None]) -> Job: ...


class InMemoryJobStore:
    """Keyed job map guarded by a single lock.

    Callers only ever see copies, so a poll never observes a record halfway
    through an update.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._lock = threading.Lock()

    def put(self, job: Job) -> Job:
        with self._lock:
            if job.id in self._jobs:
                raise ValueError(f"Job id already in use: {job.id}")
            self._jobs[job.id] = job.model_copy(deep=True)
        return job

    def get(self, job_id: str) -> Job | None:
        with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy(deep=True) if job else None

    def update(self, job_id: str, mutate: Callable[[Job], None]) -> Job:
        """Apply ``mutate`` to the stored record in place and return a copy."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise KeyError(job_id)
            mutate(job)
            job.updated_at = datetime.now(timezone.utc)
            return job.model_copy(deep=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_store: JobStore | None = None


def get_job_store() -> JobStore:
    """Return the process-wide job store used by the API."""
    global _store
    if _store is None:
        _store = InMemoryJobStore()
        logger.info("Using in-memory job store (jobs are lost on restart)")
    return _store


def _new_job_id() -> str:
    return f"job_{int(time.time() * 1000)}_{secrets.token_hex(6)}"
