"""Predicates deciding whether an object is eligible for deletion."""

from __future__ import annotations

from datetime import datetime
from typing import AbstractSet

from .config import normalize_prefix
from .models import CleanupConfig, StorageObjectRef


def is_expired(obj: StorageObjectRef, cutoff: datetime) -> bool:
    return obj.last_modified < cutoff


def matches_file_type(key: str, file_types: AbstractSet[str]) -> bool:
    """Return ``True`` when ``key`` ends with one of ``file_types``.

    Matching ignores case on both sides. An empty set matches every key.
    """
    if not file_types:
        return True
    lowered = key.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in file_types)


def matches_prefix(key: str, prefixes: AbstractSet[str]) -> bool:
    """Return ``True`` when ``key`` lives under one of ``prefixes``.

    An empty set matches every key.
    """
    if not prefixes:
        return True
    return any(key.startswith(normalize_prefix(prefix)) for prefix in prefixes)


def is_eligible(obj: StorageObjectRef, cutoff: datetime, config: CleanupConfig) -> bool:
    return (
        is_expired(obj, cutoff)
        and matches_file_type(obj.key, config.file_types)
        and matches_prefix(obj.key, config.prefixes)
    )


__all__ = ["is_expired", "matches_file_type", "matches_prefix", "is_eligible"]
