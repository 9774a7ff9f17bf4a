from __future__ import annotations

import re
from typing import Optional

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_valid_hhmm(value: str) -> bool:
    return bool(_HHMM.match(value))


def is_valid_day_of_week(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6
