from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import to_date_string, today_local
from ..core.enums import EventType
from ..users.model import UserPreferences
from .model import CalendarEvent


def _category_enabled(event_type: EventType, prefs: UserPreferences) -> bool:
    if event_type == EventType.EXAM:
        return prefs.notify_exams
    if event_type == EventType.DEADLINE:
        return prefs.notify_deadlines
    if event_type == EventType.EVENT:
        return prefs.notify_events
    # SUBMISSION has no switch of its own
    return True


def events_due_for_reminder(
    events: Iterable[CalendarEvent],
    prefs: UserPreferences,
    *,
    today: Optional[date] = None,
) -> list[CalendarEvent]:
    """Events happening tomorrow that have not been announced yet.

    Only selects; delivering the notification is up to the caller, which
    then reports back through TrackerSession.mark_events_notified.
    """
    if not prefs.notifications_enabled:
        return []

    tomorrow = to_date_string((today or today_local()) + timedelta(days=1))
    return [
        e
        for e in events
        if not e.has_notified and e.date == tomorrow and _category_enabled(e.type, prefs)
    ]
