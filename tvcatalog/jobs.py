"""
Simulated long-running query jobs.

A job waits for its delay on a worker thread, runs a filtered query and
keeps the rows in memory until it is downloaded or deleted.
"""

import random
import threading
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .config import Config
from .database import DatabaseManager
from .errors import ConflictError, NotFoundError
from .queries import QueryRunner, validate_filters
from .utils import setup_logger

QUEUED = "queued"
RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"
CANCELLED = "cancelled"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


@dataclass
class Job:
    """State of one query job."""

    id: str
    entity: str
    filters: Dict[str, Any]
    include: Optional[str]
    delay_ms: int
    status: str = QUEUED
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)
    rows: Optional[List[dict]] = None
    error: Optional[str] = None
    started: float = field(default_factory=time.monotonic)
    cancel_event: threading.Event = field(default_factory=threading.Event)
    future: Optional[Future] = None

    @property
    def filename(self) -> str:
        return f"{self.entity}_query_{self.id}.json"

    def eta_ms(self) -> int:
        if self.status not in (QUEUED, RUNNING):
            return 0
        elapsed_ms = int((time.monotonic() - self.started) * 1000)
        return max(0, self.delay_ms - elapsed_ms)

    def set_status(self, status: str) -> None:
        self.status = status
        self.updated_at = _now()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "entity": self.entity,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "eta_ms": self.eta_ms(),
            "rows": len(self.rows) if self.rows is not None else None,
            "error": self.error,
            "download_url": f"/jobs/{self.id}/download" if self.status == COMPLETED else None,
        }

    def payload(self) -> dict:
        filters = dict(self.filters)
        if self.include:
            filters["include"] = self.include
        return {"filters": filters, "count": len(self.rows or []), "rows": self.rows or []}


class JobManager:
    """
    Runs query jobs on a thread pool.

    Jobs live in memory only; restarting the process forgets them.
    """

    def __init__(self, db: DatabaseManager, config: Config, queries: Optional[QueryRunner] = None):
        self.config = config
        self.queries = queries or QueryRunner(db)
        self.executor = ThreadPoolExecutor(max_workers=max(1, config.job_workers))
        self.logger = setup_logger("jobs", config.log_dir)
        self._jobs: Dict[str, Job] = {}
        self._lock = threading.Lock()

    def resolve_delay(self, delay_ms: Optional[int]) -> int:
        """Clamp a requested delay, or pick the default plus random jitter."""
        if delay_ms is None:
            jitter = random.randint(0, max(0, self.config.job_delay_jitter_ms))
            delay_ms = self.config.job_default_delay_ms + jitter
        return max(self.config.job_min_delay_ms, min(self.config.job_max_delay_ms, int(delay_ms)))

    def submit(
        self,
        entity: str,
        filters: Optional[Dict[str, Any]] = None,
        include: Optional[str] = None,
        delay_ms: Optional[int] = None,
    ) -> Job:
        """Queue a query job and return it immediately. Bad filters fail here, not in the worker."""
        job = Job(
            id=str(uuid.uuid4()),
            entity=entity,
            filters=validate_filters(entity, filters),
            include=include,
            delay_ms=self.resolve_delay(delay_ms),
        )
        with self._lock:
            self._jobs[job.id] = job
        job.future = self.executor.submit(self._run, job)
        self.logger.info(f"Queued {entity} query job {job.id} (delay={job.delay_ms}ms)")
        return job

    def _run(self, job: Job) -> None:
        """Wait out the delay, then run the query in the background."""
        if job.cancel_event.wait(job.delay_ms / 1000):
            return
        job.set_status(RUNNING)
        try:
            rows = self.queries.run(job.entity, job.filters, job.include)
            if job.cancel_event.is_set():
                return
            job.rows = rows
            job.set_status(COMPLETED)
            self.logger.info(f"Job {job.id} completed with {len(job.rows)} rows")
        except Exception as e:
            job.error = str(e)
            job.set_status(FAILED)
            self.logger.error(f"Job {job.id} failed: {e}")

    def get(self, job_id: str) -> Job:
        with self._lock:
            job = self._jobs.get(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    def download(self, job_id: str) -> dict:
        """Return the result payload; ConflictError until the job completed."""
        job = self.get(job_id)
        if job.status != COMPLETED:
            raise ConflictError(
                f"Job is {job.status}, results are not available",
                details={"status": job.status},
            )
        return job.payload()

    def delete(self, job_id: str) -> None:
        """Cancel a pending job and forget it."""
        job = self.get(job_id)
        job.cancel_event.set()
        if job.status in (QUEUED, RUNNING):
            job.set_status(CANCELLED)
        with self._lock:
            self._jobs.pop(job_id, None)
        self.logger.info(f"Deleted job {job_id}")

    def wait(self, job_id: str, timeout: Optional[float] = None) -> Job:
        """Block until the job's worker finishes."""
        job = self.get(job_id)
        if job.future is not None:
            job.future.result(timeout=timeout)
        return job

    def shutdown(self) -> None:
        with self._lock:
            jobs = list(self._jobs.values())
        for job in jobs:
            job.cancel_event.set()
        self.executor.shutdown(wait=False)
