from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from ..common.ids import new_id
from ..common.validators import is_blank, is_valid_day_of_week, is_valid_hhmm
from .model import ScheduleUnit

logger = logging.getLogger(__name__)

_INVALID = object()


def _normalize_time(value: Optional[str]):
    if is_blank(value):
        return None
    value = str(value).strip()
    return value if is_valid_hhmm(value) else _INVALID


class Timetable:
    """The weekly set of recurring units of one workspace.

    Invalid edits (blank title, bad weekday or time, unknown id) are
    ignored and reported as None rather than raised.
    """

    def __init__(self, units: Iterable[ScheduleUnit] = ()):
        self._units: list[ScheduleUnit] = list(units)

    def units(self) -> list[ScheduleUnit]:
        return list(self._units)

    def get(self, unit_id: str) -> Optional[ScheduleUnit]:
        for u in self._units:
            if u.id == unit_id:
                return u
        return None

    def units_for_day(self, day_of_week: int) -> list[ScheduleUnit]:
        """Units on that weekday by start time; untimed units come first."""
        units = [u for u in self._units if u.day_of_week == day_of_week]
        units.sort(key=lambda u: u.start_time or "")
        return units

    def add_unit(
        self,
        *,
        title: str,
        day_of_week: int,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> Optional[ScheduleUnit]:
        fields = self._clean(title, day_of_week, start_time, end_time)
        if fields is None:
            return None

        unit = ScheduleUnit(id=new_id(), **fields)
        self._units.append(unit)
        logger.debug("unit_added", extra={"unit_id": unit.id, "day_of_week": unit.day_of_week})
        return unit

    def edit_unit(
        self,
        unit_id: str,
        *,
        title: str,
        day_of_week: int,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> Optional[ScheduleUnit]:
        fields = self._clean(title, day_of_week, start_time, end_time)
        if fields is None:
            return None

        for i, u in enumerate(self._units):
            if u.id == unit_id:
                updated = replace(u, **fields)
                self._units[i] = updated
                return updated
        return None

    def remove_unit(self, unit_id: str) -> bool:
        """Drop a unit. Its attendance records stay behind as orphans."""
        before = len(self._units)
        self._units = [u for u in self._units if u.id != unit_id]
        return len(self._units) < before

    def __len__(self) -> int:
        return len(self._units)

    @staticmethod
    def _clean(title, day_of_week, start_time, end_time) -> Optional[dict]:
        if is_blank(title) or not is_valid_day_of_week(day_of_week):
            return None
        start = _normalize_time(start_time)
        end = _normalize_time(end_time)
        if start is _INVALID or end is _INVALID:
            return None
        return {"title": title.strip(), "day_of_week": day_of_week, "start_time": start, "end_time": end}
