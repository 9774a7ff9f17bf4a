from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceRecord:
    """Status of one unit on one calendar date (YYYY-MM-DD)."""

    date: str
    unit_id: str
    status: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.date, self.unit_id)
