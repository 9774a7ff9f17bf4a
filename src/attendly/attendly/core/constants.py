"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"

LEAVE_STATUS = "LEAVE"

# Classes that did not effectively take place; counted overall, not per subject.
SUBJECT_EXCLUDED_STATUSES = frozenset({"CANCELED", "HOLIDAY"})

DEFAULT_TARGET_PERCENTAGE = 75
DEFAULT_DANGER_THRESHOLD = 60
DEFAULT_WORKSPACE_NAME = "Main Schedule"

ID_LENGTH = 12
