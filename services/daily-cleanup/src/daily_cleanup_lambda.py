"""Scheduled Lambda that removes expired objects from an S3 bucket.

Settings come from ``BUCKET_NAME``, ``DAYS``, ``DRY_RUN``, ``FILE_TYPES``,
``PREFIXES`` and ``SNS_TOPIC_ARN``. An event of ``{"dry_run": true}`` forces a
dry run regardless of ``DRY_RUN``.
"""

from __future__ import annotations

from typing import Any, Dict

import boto3

from common_utils import configure_logger
from daily_cleanup import CloudWatchMetrics, S3Storage, SnsNotifier, handle_request
from daily_cleanup.config import parse_dry_run

logger = configure_logger(__name__)

# Initialize boto3 clients once per container
_s3 = boto3.client("s3")
_sns = boto3.client("sns")
_cloudwatch = boto3.client("cloudwatch")


def _event_dry_run(event: Dict[str, Any] | None) -> bool:
    value = (event or {}).get("dry_run")
    if isinstance(value, bool):
        return value
    return parse_dry_run(value)


def lambda_handler(event: Dict[str, Any], context: Any) -> str:
    return handle_request(
        storage=S3Storage(_s3),
        notifier=SnsNotifier(_sns),
        metrics=CloudWatchMetrics(_cloudwatch),
        dry_run=_event_dry_run(event),
    )
