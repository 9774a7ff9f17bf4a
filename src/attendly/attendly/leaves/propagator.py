from __future__ import annotations

import logging
from typing import Callable, Optional

from ..attendance.ledger import AttendanceLedger
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import day_of_week, iter_days, to_date_string, try_parse_date
from ..common.ids import new_id
from ..core.constants import LEAVE_STATUS
from ..schedules.timetable import Timetable
from .model import LeaveRecord

logger = logging.getLogger(__name__)


class LeavePropagator:
    """Expand a leave range into LEAVE marks for every scheduled unit.

    The literal LEAVE key is written even when the workspace registry does
    not define it; aggregation then leaves those records out.
    """

    def __init__(self, *, id_factory: Optional[Callable[[], str]] = None):
        self._new_id = id_factory or new_id

    def apply_leave(
        self,
        start_date: str,
        end_date: str,
        reason: str,
        timetable: Timetable,
        ledger: AttendanceLedger,
    ) -> Optional[LeaveRecord]:
        start = try_parse_date(start_date)
        end = try_parse_date(end_date)
        if start is None or end is None or start > end:
            return None

        leave = LeaveRecord(
            id=self._new_id(),
            start_date=to_date_string(start),
            end_date=to_date_string(end),
            reason=(reason or "").strip(),
        )

        marks: list[AttendanceRecord] = []
        for d in iter_days(start, end):
            date_str = to_date_string(d)
            for unit in timetable.units_for_day(day_of_week(d)):
                marks.append(AttendanceRecord(date=date_str, unit_id=unit.id, status=LEAVE_STATUS))

        written = ledger.merge(marks, overwrite=True)
        logger.info(
            "leave_applied",
            extra={"leave_id": leave.id, "start": leave.start_date, "end": leave.end_date, "records": written},
        )
        return leave
