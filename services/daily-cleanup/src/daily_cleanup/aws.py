"""Thin wrappers around the boto3 clients used by the cleanup job."""

from __future__ import annotations

import os
from typing import Any, Iterator, Optional

from botocore.exceptions import ClientError

from common_utils import configure_logger, error_message, iter_s3_objects

from .models import DeleteOutcome, StorageObjectRef

logger = configure_logger(__name__)

DEFAULT_METRICS_NAMESPACE = "S3Cleanup"
# SNS rejects subjects longer than 100 characters
MAX_SUBJECT_LENGTH = 100


class S3Storage:
    """List and delete objects in an S3 bucket."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def list_objects(
        self, bucket: str, prefix: Optional[str] = None
    ) -> Iterator[StorageObjectRef]:
        """Yield every object in ``bucket``, following continuation tokens."""
        for entry in iter_s3_objects(self.client, bucket, prefix):
            yield StorageObjectRef.from_s3(entry)

    def delete_object(self, bucket: str, key: str) -> DeleteOutcome:
        """Delete ``key`` from ``bucket``; failures are logged and returned."""
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            logger.exception("Failed to delete object %s from bucket %s", key, bucket)
            code = exc.response.get("Error", {}).get("Code")
            return DeleteOutcome(key=key, success=False, error=code or error_message(exc))
        except Exception as exc:
            logger.exception("Failed to delete object %s from bucket %s", key, bucket)
            return DeleteOutcome(key=key, success=False, error=error_message(exc))
        logger.info("Deleted object: %s", key)
        return DeleteOutcome(key=key, success=True)


class SnsNotifier:
    """Publish failure alerts to an SNS topic."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def send_notification(self, topic_arn: str, subject: str, body: str) -> None:
        self.client.publish(
            TopicArn=topic_arn,
            Subject=subject[:MAX_SUBJECT_LENGTH],
            Message=body,
        )
        logger.info("Notification sent to %s", topic_arn)


class CloudWatchMetrics:
    """Publish deletion counters as CloudWatch custom metrics."""

    def __init__(self, client: Any, namespace: Optional[str] = None) -> None:
        self.client = client
        self.namespace = (
            namespace
            or os.environ.get("METRICS_NAMESPACE")
            or DEFAULT_METRICS_NAMESPACE
        )

    def publish_metrics(self, bucket: str, count: int, total_bytes: int) -> None:
        dimensions = [{"Name": "BucketName", "Value": bucket}]
        self.client.put_metric_data(
            Namespace=self.namespace,
            MetricData=[
                {
                    "MetricName": "FilesDeleted",
                    "Dimensions": dimensions,
                    "Value": count,
                    "Unit": "Count",
                },
                {
                    "MetricName": "BytesDeleted",
                    "Dimensions": dimensions,
                    "Value": total_bytes,
                    "Unit": "Bytes",
                },
            ],
        )
        logger.info(
            "Published metrics for %s: %s files, %s bytes", bucket, count, total_bytes
        )


__all__ = ["S3Storage", "SnsNotifier", "CloudWatchMetrics"]
