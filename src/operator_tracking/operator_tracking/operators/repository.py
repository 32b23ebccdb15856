from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple

from ..core.enums import OperatorStatus, SkillLevel
from .model import Operator, OperatorView


class OperatorRepository(Protocol):
    """Repository interface for operators.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, operator_id: int) -> Optional[Operator]:
        raise NotImplementedError

    def list_with_assignments(self, *, on_date: date) -> Sequence[OperatorView]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        employee_id: Optional[str],
        department_id: Optional[int],
        skill_level: SkillLevel,
    ) -> int:
        raise NotImplementedError

    def update(self, operator_id: int, *, changes: Mapping[str, Any], last_active: datetime) -> bool:
        """Apply a partial update; columns absent from `changes` keep their value."""

        raise NotImplementedError

    def set_status(self, operator_id: int, *, status: OperatorStatus, last_active: datetime) -> bool:
        raise NotImplementedError

    def delete(self, operator_id: int) -> bool:
        """Delete an operator; assignments and attendance logs cascade."""

        raise NotImplementedError

    def upsert_by_email(
        self,
        *,
        name: str,
        email: str,
        employee_id: Optional[str],
        department_id: Optional[int],
        skill_level: SkillLevel,
    ) -> Tuple[int, bool]:
        """Insert, or overwrite name/employee_id/department/skill of the row with this email.

        Returns (operator_id, created).
        """

        raise NotImplementedError
