"""Evaluate a bucket listing against the retention rules and delete expired objects."""

from __future__ import annotations

import dataclasses
import datetime
import os
from typing import Any, Optional

from common_utils import configure_logger, error_message, log_exception

from .config import ConfigError, Lookup, load_config
from .filters import is_eligible
from .models import CleanupConfig, CleanupResult

logger = configure_logger(__name__)

FAILURE_SUBJECT = "Daily Cleanup Job Failed"


def compute_cutoff(
    retention_days: int, now: Optional[datetime.datetime] = None
) -> datetime.datetime:
    """Return the instant before which objects are considered expired."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now - datetime.timedelta(days=retention_days)


def run_cleanup(
    config: CleanupConfig,
    storage: Any,
    metrics: Any,
    now: Optional[datetime.datetime] = None,
) -> CleanupResult:
    """Run one pass over ``config.bucket_name``.

    ``storage`` must provide ``list_objects(bucket)`` and
    ``delete_object(bucket, key)``; ``metrics`` must provide
    ``publish_metrics(bucket, count, total_bytes)``. The cutoff is computed
    once so every object is judged against the same instant.
    """
    cutoff = compute_cutoff(config.retention_days, now)
    logger.info("Cutoff for %s: %s", config.bucket_name, cutoff.isoformat())

    result = CleanupResult(bucket_name=config.bucket_name, dry_run=config.dry_run)
    for obj in storage.list_objects(config.bucket_name):
        if not is_eligible(obj, cutoff, config):
            continue
        outcome = None
        if not config.dry_run:
            outcome = storage.delete_object(config.bucket_name, obj.key)
        result.record(obj, outcome)

    if result.warnings:
        logger.warning(
            "%s of %s deletes failed in %s",
            len(result.warnings),
            result.count,
            config.bucket_name,
        )
    if result.count > 0 and not config.dry_run:
        metrics.publish_metrics(config.bucket_name, result.count, result.total_bytes)
    return result


def _notify_failure(notifier: Any, topic_arn: Optional[str], message: str) -> None:
    if not topic_arn:
        logger.warning("SNS_TOPIC_ARN not configured; skipping failure notification")
        return
    try:
        notifier.send_notification(
            topic_arn, FAILURE_SUBJECT, f"Error during cleanup process: {message}"
        )
    except Exception as exc:
        log_exception("Failed to send failure notification", exc, logger)


def _fail(notifier: Any, topic_arn: Optional[str], exc: Exception) -> str:
    message = error_message(exc)
    log_exception("Error during cleanup process", exc, logger)
    _notify_failure(notifier, (topic_arn or "").strip() or None, message)
    return f"Error processing request: {message}"


def handle_request(
    storage: Any,
    notifier: Any,
    metrics: Any,
    lookup: Lookup | None = None,
    dry_run: Optional[bool] = None,
    now: Optional[datetime.datetime] = None,
) -> str:
    """Load settings, run the cleanup and return the text report.

    Invalid settings return the validation message without touching any
    collaborator. Any other failure is logged, reported through ``notifier``
    and returned as an ``Error processing request`` string.
    """
    logger.info("Starting daily cleanup process...")
    try:
        config = load_config(lookup)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return str(exc)
    except Exception as exc:
        # SSM lookup failed; the topic can only come from the environment
        return _fail(notifier, os.environ.get("SNS_TOPIC_ARN"), exc)
    if dry_run:
        config = dataclasses.replace(config, dry_run=True)

    try:
        report = run_cleanup(config, storage, metrics, now=now).report()
    except Exception as exc:
        return _fail(notifier, config.sns_topic_arn, exc)

    logger.info("Response: %s", report)
    logger.info("Cleanup completed successfully.")
    return report


__all__ = ["compute_cutoff", "run_cleanup", "handle_request", "FAILURE_SUBJECT"]
