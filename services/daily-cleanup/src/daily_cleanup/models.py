from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class CleanupConfig:
    """Settings for one cleanup run, read once from the environment."""

    bucket_name: str
    retention_days: int
    dry_run: bool = False
    file_types: FrozenSet[str] = frozenset()
    prefixes: FrozenSet[str] = frozenset()
    sns_topic_arn: Optional[str] = None


@dataclass(frozen=True)
class StorageObjectRef:
    """Single object returned by the bucket listing."""

    key: str
    last_modified: datetime
    size: int = 0

    @classmethod
    def from_s3(cls, data: Dict[str, Any]) -> "StorageObjectRef":
        if "Key" not in data:
            raise ValueError("Key missing from listing entry")
        if "LastModified" not in data:
            raise ValueError(f"LastModified missing for {data['Key']}")
        return cls(
            key=data["Key"],
            last_modified=data["LastModified"],
            size=int(data.get("Size") or 0),
        )


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a single delete request."""

    key: str
    success: bool
    error: Optional[str] = None


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ISO-8601 in UTC with a ``Z`` suffix.

    ``value`` must be timezone-aware; naive datetimes raise ``ValueError``.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"naive datetime cannot be rendered as UTC: {value!r}")
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class CleanupResult:
    """Counters and report lines accumulated during a cleanup pass."""

    bucket_name: str
    dry_run: bool
    count: int = 0
    total_bytes: int = 0
    lines: List[str] = field(default_factory=list)
    warnings: List[DeleteOutcome] = field(default_factory=list)

    def record(self, obj: StorageObjectRef, outcome: Optional[DeleteOutcome] = None) -> None:
        """Account for ``obj`` as deleted, or as a would-be deletion in dry run.

        Failed deletes are still counted; the failure is kept in ``warnings``.
        """
        tag = "[WOULD DELETE]" if self.dry_run else "[DELETED]"
        self.lines.append(
            f"{tag} {obj.key} (last modified: {format_timestamp(obj.last_modified)})"
        )
        self.count += 1
        self.total_bytes += obj.size
        if outcome is not None and not outcome.success:
            self.warnings.append(outcome)

    def summary(self) -> str:
        if self.dry_run:
            return (
                f"[DRY RUN] {self.count} files would be deleted "
                f"(total size: {self.total_bytes} bytes)"
            )
        return f"{self.count} files deleted (total size: {self.total_bytes} bytes)"

    def report(self) -> str:
        """Return the multi-line text report for this run."""
        header = "[DRY RUN] " if self.dry_run else ""
        out = [f"{header}Objects to be deleted from bucket {self.bucket_name}:"]
        out.extend(self.lines)
        out.append(self.summary())
        for warning in self.warnings:
            out.append(f"[WARNING] Failed to delete {warning.key}: {warning.error}")
        return "\n".join(out) + "\n"


__all__ = [
    "CleanupConfig",
    "StorageObjectRef",
    "DeleteOutcome",
    "CleanupResult",
    "format_timestamp",
]
