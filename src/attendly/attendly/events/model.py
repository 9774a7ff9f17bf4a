from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class CalendarEvent:
    """A dated milestone (exam, deadline, ...) on the workspace calendar."""

    id: str
    date: str
    title: str
    type: EventType = EventType.EVENT
    description: Optional[str] = None
    has_notified: bool = False
