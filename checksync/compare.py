"""
Comparison Layer - Classify origin and translated indexes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Mapping, Optional

from .index import LookupFailure, Stamp


STALENESS_THRESHOLDS = (365, 180, 90, 30, 14)


class Status(str, Enum):
    UP_TO_DATE = "uptodate"
    BEHIND = "behind"
    UNTRANSLATED = "untranslated"
    ORPHANED = "missing"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ComparisonEntry:
    path: str
    origin_at: Optional[Stamp]
    translated_at: Optional[Stamp]
    status: Status

    @property
    def bucket(self) -> Optional[int]:
        if self.status is not Status.BEHIND:
            return None
        return staleness_bucket(self.origin_at, self.translated_at)


def staleness_bucket(origin_at: datetime, translated_at: datetime) -> int:
    """Largest threshold in days the translation lags behind, or 1."""
    for days in STALENESS_THRESHOLDS:
        if origin_at - timedelta(days=days) > translated_at:
            return days
    return 1


def _classify(origin_at: Stamp, translated_at: Stamp) -> Status:
    if isinstance(origin_at, LookupFailure) or isinstance(translated_at, LookupFailure):
        return Status.UNKNOWN
    if origin_at <= translated_at:
        return Status.UP_TO_DATE
    return Status.BEHIND


def compare_indexes(
    origin: Mapping[str, Stamp], translated: Mapping[str, Stamp]
) -> List[ComparisonEntry]:
    report: List[ComparisonEntry] = []
    for path in sorted(origin):
        origin_at = origin[path]
        if path in translated:
            translated_at = translated[path]
            status = _classify(origin_at, translated_at)
            report.append(ComparisonEntry(path, origin_at, translated_at, status))
        else:
            report.append(ComparisonEntry(path, origin_at, None, Status.UNTRANSLATED))

    for path in sorted(set(translated) - set(origin)):
        report.append(ComparisonEntry(path, None, translated[path], Status.ORPHANED))
    return report


def summarize(entries: List[ComparisonEntry]) -> Dict[Status, int]:
    counts = {status: 0 for status in Status}
    for entry in entries:
        counts[entry.status] += 1
    return counts
