from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ShiftAssignment:
    """Who works which shift (and optionally which station) on which date."""

    id: int
    shift_id: int
    operator_id: int
    assigned_date: date
    station_id: Optional[int] = None


@dataclass(frozen=True)
class AssignmentView:
    id: int
    assigned_date: date
    shift_id: int
    shift_name: str
    operator_id: int
    operator_name: str
    station_id: Optional[int]
    station_name: Optional[str]
    line_name: Optional[str]
