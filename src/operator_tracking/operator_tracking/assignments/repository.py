from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AssignmentView, ShiftAssignment


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: int) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def find_station_holder(self, *, station_id: int, shift_id: int, assigned_date: date) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        shift_id: int,
        operator_id: int,
        assigned_date: date,
        station_id: Optional[int] = None,
    ) -> ShiftAssignment:
        """Create the (shift, operator, date) assignment or update its station.

        Runs as a single transaction; never creates a second row for the same key.
        """

        raise NotImplementedError

    def delete(self, assignment_id: int) -> bool:
        raise NotImplementedError

    def list_for_date(self, *, assigned_date: date, shift_id: Optional[int] = None) -> Sequence[AssignmentView]:
        raise NotImplementedError
