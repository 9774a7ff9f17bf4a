from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LeaveRecord:
    """Audit entry for a planned leave range (dates inclusive, YYYY-MM-DD)."""

    id: str
    start_date: str
    end_date: str
    reason: str = ""
