from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import is_blank
from ..core.constants import DEFAULT_TARGET_PERCENTAGE
from ..core.enums import ScheduleType
from ..schedules.model import ScheduleConfig
from ..statuses.templates import registry_for, unit_name_for
from .model import Workspace


def create_workspace(
    *,
    owner_id: str,
    name: str,
    schedule_type: ScheduleType = ScheduleType.ACADEMIC,
    custom_statuses: Optional[Iterable[Mapping]] = None,
    target_percentage: float = DEFAULT_TARGET_PERCENTAGE,
) -> Optional[Workspace]:
    """New empty workspace from a template; None when the name is blank."""
    if is_blank(name):
        return None

    schedule_type = ScheduleType(schedule_type)
    config = ScheduleConfig(
        type=schedule_type,
        unit_name=unit_name_for(schedule_type),
        statuses=registry_for(schedule_type, custom_statuses),
    )
    return Workspace(
        id=new_id(),
        owner_id=owner_id,
        name=name.strip(),
        created_at=now_local().isoformat(timespec="seconds"),
        config=config,
        target_percentage=target_percentage,
    )
