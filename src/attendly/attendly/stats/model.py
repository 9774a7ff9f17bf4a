from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import AttendanceStanding


@dataclass(frozen=True)
class SubjectStat:
    title: str
    percentage: int
    total_classes: int


@dataclass(frozen=True)
class AttendanceSummary:
    """Numeric inputs for whatever renders insights; no text is produced here."""

    overall_percentage: int
    target_percentage: float
    danger_threshold: float
    total_records: int
    counted_records: int
    standing: AttendanceStanding
    subjects: list[SubjectStat] = field(default_factory=list)
