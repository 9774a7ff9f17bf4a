from __future__ import annotations

import math

from ..attendance.ledger import AttendanceLedger
from ..core.enums import AttendanceStanding
from ..schedules.timetable import Timetable
from ..statuses.registry import StatusRegistry
from .model import AttendanceSummary, SubjectStat


def round_half_up(value: float) -> int:
    """Nearest integer, ties away from zero (inputs here are never negative)."""
    return int(math.floor(value + 0.5))


def _percentage(earned: float, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(earned / total * 100)


def counted_totals(ledger: AttendanceLedger, registry: StatusRegistry) -> tuple[int, float]:
    """(records with a known status, sum of their weights)."""
    total = 0
    earned = 0.0
    for r in ledger:
        definition = registry.lookup(r.status)
        if definition is None:
            continue
        total += 1
        earned += definition.weight
    return total, earned


def overall_percentage(ledger: AttendanceLedger, registry: StatusRegistry) -> int:
    total, earned = counted_totals(ledger, registry)
    return _percentage(earned, total)


def subject_stats(ledger: AttendanceLedger, timetable: Timetable, registry: StatusRegistry) -> list[SubjectStat]:
    """Per-title percentages, in order of first appearance in the ledger.

    Units sharing a title are merged into one subject. Records of deleted
    units, unknown statuses and non-countable statuses (CANCELED, HOLIDAY)
    are skipped, and subjects left with no counted class are dropped.
    """
    titles = {u.id: u.title for u in timetable.units()}
    groups: dict[str, list[float]] = {}

    for r in ledger:
        title = titles.get(r.unit_id)
        if title is None:
            continue
        group = groups.setdefault(title, [0, 0.0])
        definition = registry.lookup(r.status)
        if definition is None or not definition.countable:
            continue
        group[0] += 1
        group[1] += definition.weight

    return [
        SubjectStat(title=title, percentage=_percentage(earned, int(total)), total_classes=int(total))
        for title, (total, earned) in groups.items()
        if total > 0
    ]


def standing_for(percentage: int, *, counted: int, target: float, danger_threshold: float) -> AttendanceStanding:
    if counted == 0:
        return AttendanceStanding.NO_DATA
    if percentage < danger_threshold:
        return AttendanceStanding.CRITICAL
    if percentage < target:
        return AttendanceStanding.WARNING
    return AttendanceStanding.HEALTHY


def summarize(
    ledger: AttendanceLedger,
    timetable: Timetable,
    registry: StatusRegistry,
    *,
    target_percentage: float,
    danger_threshold: float,
) -> AttendanceSummary:
    total, earned = counted_totals(ledger, registry)
    overall = _percentage(earned, total)
    return AttendanceSummary(
        overall_percentage=overall,
        target_percentage=target_percentage,
        danger_threshold=danger_threshold,
        total_records=len(ledger),
        counted_records=total,
        standing=standing_for(overall, counted=total, target=target_percentage, danger_threshold=danger_threshold),
        subjects=subject_stats(ledger, timetable, registry),
    )
