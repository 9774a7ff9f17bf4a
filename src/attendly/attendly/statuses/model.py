from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import SUBJECT_EXCLUDED_STATUSES
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class StatusDefinition:
    """One attendance status a workspace can assign.

    `weight` is the fraction of credit earned (1 = full, 0 = none).
    `color` is an opaque presentation hint kept for snapshots.
    """

    key: str
    label: str
    weight: float
    color: Optional[str] = None

    def __post_init__(self):
        if not self.key or not self.key.strip():
            raise ValidationError("Status key is required")
        if isinstance(self.weight, bool) or not isinstance(self.weight, (int, float)):
            raise ValidationError(f"Weight of {self.key} must be a number")
        if not 0 <= self.weight <= 1:
            raise ValidationError(f"Weight of {self.key} must be between 0 and 1")

    @property
    def countable(self) -> bool:
        """Whether the status takes part in per-subject statistics."""
        return self.key not in SUBJECT_EXCLUDED_STATUSES
