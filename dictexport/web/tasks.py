"""
Background job helpers for long-running exports.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from dictexport.exceptions import ExportInProgressError
from dictexport.export.manager import ExportManager
from dictexport.export.progress import ExportProgress, ExportSummary
from dictexport.logger import get_logger

logger = get_logger(__name__)


@dataclass
class JobState:
    """In-memory representation of an export job."""

    job_id: str
    targets: List[str] = field(default_factory=list)
    state: str = "pending"  # pending|running|completed|failed
    created_at: float = field(default_factory=time.time)
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    progress: Dict[str, Any] = field(default_factory=dict)
    progress_history: List[Dict[str, Any]] = field(default_factory=list)
    summaries: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    last_update: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_jobs: Dict[str, JobState] = {}
_jobs_lock = threading.Lock()
_JOB_RETENTION_SECONDS = 600  # Retain job info for 10 minutes after completion


def create_export_job(
    targets: List[str],
    config: Optional[Dict[str, Any]] = None,
    background: bool = True,
) -> JobState:
    """
    Create and launch an export job.

    Args:
        targets: Target codes to export.
        config: Configuration passed to the ExportManager.
        background: Run in a daemon thread (False runs inline).

    Returns:
        JobState for the new job (already registered).

    Raises:
        ExportInProgressError: If a pending or running job writes one of the targets.
    """
    job = JobState(job_id=uuid.uuid4().hex, targets=list(targets))

    with _jobs_lock:
        _cleanup_jobs_locked()
        active = _find_active_job_locked(job.targets)
        if active:
            busy = sorted(set(active.targets) & set(job.targets))
            raise ExportInProgressError(
                f"Export job {active.job_id} is already writing targets {', '.join(busy)}",
                details={"job_id": active.job_id, "targets": busy},
            )
        _jobs[job.job_id] = job

    logger.info("Export job %s created (targets=%s)", job.job_id, job.targets)
    if not background:
        _run_export_job(job, config)
        return job

    thread = threading.Thread(
        target=_run_export_job,
        args=(job, config),
        name=f"export-job-{job.job_id}",
        daemon=True,
    )
    thread.start()
    return job


def _find_active_job_locked(targets: List[str]) -> Optional[JobState]:
    """Return a pending or running job sharing any target code (call with lock held)."""
    wanted = set(targets)
    for job in _jobs.values():
        if job.state in ("pending", "running") and wanted & set(job.targets):
            return job
    return None


def get_job(job_id: str) -> Optional[JobState]:
    """Fetch a job by ID (if still retained)."""
    with _jobs_lock:
        job = _jobs.get(job_id)
        if job and job.finished_at and (time.time() - job.finished_at) > _JOB_RETENTION_SECONDS:
            _jobs.pop(job_id, None)
            return None
        return job


def get_latest_job() -> Optional[JobState]:
    """Return the most recently created retained job."""
    with _jobs_lock:
        _cleanup_jobs_locked()
        if not _jobs:
            return None
        return max(_jobs.values(), key=lambda j: j.created_at)


def serialize_job(job: JobState) -> Dict[str, Any]:
    """Convert JobState into JSON-safe dict."""
    with _jobs_lock:
        return job.to_dict()


def _run_export_job(job: JobState, config: Optional[Dict[str, Any]]):
    """Worker function executed in a background thread."""
    with _jobs_lock:
        job.state = "running"
        job.started_at = time.time()
        job.last_update = job.started_at

    def on_progress(progress: ExportProgress):
        with _jobs_lock:
            serialized = progress.to_dict()
            job.progress = serialized
            job.progress_history.append(serialized)
            job.last_update = time.time()

    def on_summary(summary: ExportSummary):
        with _jobs_lock:
            job.summaries.append(summary.to_dict())
            job.last_update = time.time()

    try:
        with ExportManager(config=config) as manager:
            manager.export_all(
                codes=job.targets or None,
                progress_callback=on_progress,
                summary_callback=on_summary,
            )
        with _jobs_lock:
            job.state = "completed"
            job.finished_at = time.time()
            job.last_update = job.finished_at
        logger.info("Export job %s finished (%d targets)", job.job_id, len(job.summaries))
    except Exception as exc:
        with _jobs_lock:
            job.state = "failed"
            job.error = f"{type(exc).__name__}: {exc}"
            job.error_details = getattr(exc, "details", None) or None
            job.finished_at = time.time()
            job.last_update = job.finished_at
        logger.exception("✗ Export job %s failed: %s", job.job_id, job.error)


def _cleanup_jobs_locked():
    """Remove finished jobs that exceeded retention period (call with lock held)."""
    now = time.time()
    expired = [
        job_id
        for job_id, job in _jobs.items()
        if job.finished_at and (now - job.finished_at) > _JOB_RETENTION_SECONDS
    ]
    for job_id in expired:
        _jobs.pop(job_id, None)
