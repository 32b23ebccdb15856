from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def find_id_by_name(self, name: str) -> Optional[int]:
        """Case-insensitive exact match on the department name."""

        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str] = None) -> int:
        raise NotImplementedError
