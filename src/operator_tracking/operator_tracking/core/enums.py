from __future__ import annotations

from enum import Enum


class OperatorStatus(str, Enum):
    """Presence of an operator on the floor."""

    ONLINE = "online"
    OFFLINE = "offline"
    ON_BREAK = "on_break"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class AttendanceStatus(str, Enum):
    """Status stored on a daily attendance log."""

    ABSENT = "absent"
    PRESENT = "present"


class LineStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
