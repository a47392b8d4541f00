"""Scheduled retention cleanup for a single S3 bucket."""

from .models import CleanupConfig, CleanupResult, DeleteOutcome, StorageObjectRef
from .config import ConfigError, load_config
from .filters import is_eligible, is_expired, matches_file_type, matches_prefix
from .aws import CloudWatchMetrics, S3Storage, SnsNotifier
from .cleanup import compute_cutoff, handle_request, run_cleanup

__all__ = [
    "CleanupConfig",
    "CleanupResult",
    "DeleteOutcome",
    "StorageObjectRef",
    "ConfigError",
    "load_config",
    "is_eligible",
    "is_expired",
    "matches_file_type",
    "matches_prefix",
    "S3Storage",
    "SnsNotifier",
    "CloudWatchMetrics",
    "compute_cutoff",
    "handle_request",
    "run_cleanup",
]
