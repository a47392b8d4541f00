"""Load and validate the cleanup settings."""

from __future__ import annotations

import re
from typing import Callable, FrozenSet, Optional

from common_utils import configure_logger, get_config

from .models import CleanupConfig

logger = configure_logger(__name__)

BUCKET_NAME_PATTERN = re.compile(r"[A-Za-z0-9.-]{3,63}")
PREFIX_SEPARATOR = "/"
DAYS_PATTERN = re.compile(r"[+-]?[0-9]+")

Lookup = Callable[[str], Optional[str]]


class ConfigError(ValueError):
    """Raised when the invocation settings are missing or malformed."""


def _split(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_file_types(value: Optional[str]) -> FrozenSet[str]:
    """Return the lowercase suffixes from a comma separated list."""
    return frozenset(item.lower() for item in _split(value))


def normalize_prefix(prefix: str) -> str:
    return prefix if prefix.endswith(PREFIX_SEPARATOR) else prefix + PREFIX_SEPARATOR


def parse_prefixes(value: Optional[str]) -> FrozenSet[str]:
    """Return key prefixes from a comma separated list, each ending with ``/``."""
    return frozenset(normalize_prefix(item) for item in _split(value))


def parse_dry_run(value: Optional[str]) -> bool:
    return str(value or "").lower() == "true"


def _parse_days(value: Optional[str]) -> int:
    if value is None or not value.strip():
        raise ConfigError("Environment variable DAYS is not set.")
    if not DAYS_PATTERN.fullmatch(value.strip()):
        raise ConfigError("Environment variable DAYS must be a valid integer.")
    days = int(value.strip())
    if days <= 0:
        raise ConfigError("Environment variable DAYS must be a positive integer.")
    return days


def _parse_bucket(value: Optional[str]) -> str:
    if not value:
        raise ConfigError("Environment variable BUCKET_NAME is not set.")
    if not BUCKET_NAME_PATTERN.fullmatch(value):
        raise ConfigError(
            "Invalid BUCKET_NAME. Ensure it follows S3 bucket naming conventions."
        )
    return value


def load_config(lookup: Lookup | None = None) -> CleanupConfig:
    """Build a :class:`CleanupConfig` from ``BUCKET_NAME``, ``DAYS`` and friends.

    ``lookup`` resolves a setting name to its raw string value and defaults to
    :func:`common_utils.get_config`. Raises :class:`ConfigError` on the first
    invalid setting.
    """
    lookup = lookup or get_config

    bucket_name = _parse_bucket(lookup("BUCKET_NAME"))
    retention_days = _parse_days(lookup("DAYS"))
    config = CleanupConfig(
        bucket_name=bucket_name,
        retention_days=retention_days,
        dry_run=parse_dry_run(lookup("DRY_RUN")),
        file_types=parse_file_types(lookup("FILE_TYPES")),
        prefixes=parse_prefixes(lookup("PREFIXES")),
        sns_topic_arn=(lookup("SNS_TOPIC_ARN") or "").strip() or None,
    )

    logger.info("Dry run mode: %s", config.dry_run)
    if config.file_types:
        logger.info("File types to clean up: %s", sorted(config.file_types))
    if config.prefixes:
        logger.info("Prefixes to clean up: %s", sorted(config.prefixes))
    return config


__all__ = [
    "ConfigError",
    "load_config",
    "parse_file_types",
    "parse_prefixes",
    "parse_dry_run",
    "normalize_prefix",
]
