"""Export API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from dictexport.exceptions import ConfigError, ExportInProgressError
from dictexport.export.targets import get_targets
from dictexport.logger import get_logger
from dictexport.web.tasks import create_export_job, get_job, get_latest_job, serialize_job

exports_bp = Blueprint("exports", __name__)
logger = get_logger(__name__)


def _config() -> Dict[str, Any]:
    return current_app.config["DICTEXPORT_CONFIG"]


@exports_bp.get("/targets")
def list_targets():
    """List configured export targets."""
    try:
        targets = get_targets(_config())
    except ConfigError as e:
        logger.warning("Invalid target configuration: %s", e)
        return jsonify({"error": str(e), "code": e.code, "details": e.details}), 500
    return jsonify({"targets": [target.to_dict() for target in targets]})


@exports_bp.post("/exports")
def start_export_job():
    """Start an export job for some or all targets."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    codes = data.get("targets")

    if codes is not None:
        if not isinstance(codes, list) or not all(isinstance(code, str) and code.strip() for code in codes):
            return jsonify({"error": "targets must be a list of target codes", "code": "invalid_targets"}), 400
        codes = [code.strip() for code in codes]

    # Fail fast on unknown targets before starting the job
    try:
        targets = get_targets(_config(), codes)
    except ConfigError as e:
        logger.warning("Rejected export request: %s", e)
        return jsonify({"error": str(e), "code": e.code, "details": e.details}), 400

    try:
        job = create_export_job(
            targets=[target.code for target in targets],
            config=_config(),
            background=current_app.config.get("EXPORT_JOBS_IN_BACKGROUND", True),
        )
    except ExportInProgressError as e:
        logger.warning("Rejected export request: %s", e)
        return jsonify({"error": str(e), "code": e.code, "details": e.details}), 409
    return jsonify({"job_id": job.job_id, "state": job.state}), 202


@exports_bp.get("/exports/latest")
def latest_export_job():
    """Return the most recent job, if any."""
    job = get_latest_job()
    if not job:
        return jsonify({"job_id": None, "state": None})
    return jsonify(serialize_job(job))


@exports_bp.get("/exports/<job_id>")
def export_job_status(job_id: str):
    """Return job state, progress and summaries."""
    job = get_job(job_id)
    if not job:
        return jsonify({"error": "Job not found or expired", "code": "job_not_found"}), 404
    return jsonify(serialize_job(job))
