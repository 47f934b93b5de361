"""Selection Mode Enum"""

from enum import StrEnum


class SelectionMode(StrEnum):
    """How seats get picked"""

    NONE = 'none'
    FAST = 'fast'
    MANUAL = 'manual'
