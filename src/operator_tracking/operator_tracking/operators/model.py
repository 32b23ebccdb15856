from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import OperatorStatus, SkillLevel


@dataclass(frozen=True)
class Operator:
    """Domain entity: an employee tracked on the floor."""

    id: int
    name: str
    email: str
    employee_id: Optional[str]
    department_id: Optional[int]
    skill_level: SkillLevel
    status: OperatorStatus
    last_active: Optional[datetime] = None


@dataclass(frozen=True)
class OperatorView:
    """Read-model: operator with department and the station held on a given date."""

    id: int
    name: str
    email: str
    employee_id: Optional[str]
    department_id: Optional[int]
    department_name: Optional[str]
    skill_level: SkillLevel
    status: OperatorStatus
    last_active: Optional[datetime]
    station_id: Optional[int] = None
    station_name: Optional[str] = None
    line_name: Optional[str] = None
