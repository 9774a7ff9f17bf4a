from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .model import AttendanceRecord


class AttendanceLedger:
    """Sparse (date, unit_id) -> status store.

    Holds at most one record per key. Overwrites keep the record's
    position; removals drop it. Records whose unit no longer exists are
    kept as-is.
    """

    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        self._by_key: dict[tuple[str, str], AttendanceRecord] = {}
        for r in records:
            # last occurrence wins for duplicated keys in a loaded snapshot
            self._by_key[r.key] = r

    def toggle(self, date: str, unit_id: str, status: str) -> Optional[AttendanceRecord]:
        """Mark a status, or clear it when the same status is already set.

        Returns the record now stored at the key, or None if it was cleared.
        """
        key = (date, unit_id)
        existing = self._by_key.get(key)
        if existing is not None and existing.status == status:
            del self._by_key[key]
            return None
        return self.set(date, unit_id, status)

    def set(self, date: str, unit_id: str, status: str) -> AttendanceRecord:
        record = AttendanceRecord(date=date, unit_id=unit_id, status=status)
        self._by_key[record.key] = record
        return record

    def get(self, date: str, unit_id: str) -> Optional[str]:
        record = self._by_key.get((date, unit_id))
        return record.status if record else None

    def remove(self, date: str, unit_id: str) -> bool:
        return self._by_key.pop((date, unit_id), None) is not None

    def merge(self, records: Iterable[AttendanceRecord], *, overwrite: bool = True) -> int:
        """Upsert records by key; returns how many keys were written."""
        written = 0
        for r in records:
            if not overwrite and r.key in self._by_key:
                continue
            self._by_key[r.key] = r
            written += 1
        return written

    def records(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())

    def for_date(self, date: str) -> list[AttendanceRecord]:
        return [r for r in self._by_key.values() if r.date == date]

    def __iter__(self) -> Iterator[AttendanceRecord]:
        return iter(list(self._by_key.values()))

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key
