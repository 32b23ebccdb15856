from __future__ import annotations

from datetime import date, time
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Shift, ShiftView


class ShiftRepository(Protocol):
    def list_active(self, *, on_date: date) -> Sequence[ShiftView]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        start_time: time,
        end_time: time,
        department_id: int,
        capacity: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, shift_id: int, *, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError
