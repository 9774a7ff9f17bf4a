from __future__ import annotations

import uuid

from ..core.constants import ID_LENGTH


def new_id(prefix: str = "") -> str:
    """Short random identifier, unique enough for a personal data set."""
    return f"{prefix}{uuid.uuid4().hex[:ID_LENGTH]}"
