from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_positive_int,
    optional_text,
    parse_enum,
    require_non_empty,
    require_positive_int,
)
from ..core.enums import OperatorStatus, SkillLevel
from ..core.exceptions import NotFoundError
from ..departments.repository import DepartmentRepository
from .model import Operator, OperatorView
from .repository import OperatorRepository

logger = logging.getLogger(__name__)


class OperatorService:
    """Use cases: manage operators and their presence status."""

    def __init__(
        self,
        operators: OperatorRepository,
        departments: DepartmentRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._operators = operators
        self._departments = departments
        self._clock = clock

    def list_operators(self, *, today: Optional[date] = None) -> Sequence[OperatorView]:
        return self._operators.list_with_assignments(on_date=today or self._clock().date())

    def get_operator(self, operator_id: Any) -> Operator:
        operator = self._operators.get_by_id(require_positive_int(operator_id, "Operator ID"))
        if not operator:
            raise NotFoundError("Operator not found")
        return operator

    def create_operator(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        employee_id: Optional[str] = None,
        department_id: Any = None,
        skill_level: Any = None,
    ) -> Operator:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        employee_id = optional_text(employee_id)
        department_id = self._check_department(department_id)
        skill = parse_enum(SkillLevel, skill_level, "skill level") if optional_text(skill_level) else SkillLevel.BEGINNER

        operator_id = self._operators.create(
            name=name,
            email=email,
            employee_id=employee_id,
            department_id=department_id,
            skill_level=skill,
        )
        logger.info("Created operator %s <%s>", operator_id, email)
        return self.get_operator(operator_id)

    def update_operator(self, operator_id: Any, data: Mapping[str, Any]) -> Operator:
        """Partial update: keys that are missing or None leave the column unchanged."""
        operator = self.get_operator(operator_id)

        changes: dict[str, Any] = {}
        if data.get("name") is not None:
            changes["name"] = require_non_empty(data["name"], "Name")
        if data.get("email") is not None:
            changes["email"] = require_non_empty(data["email"], "Email")
        if data.get("employee_id") is not None:
            changes["employee_id"] = optional_text(data["employee_id"])
        if data.get("department_id") is not None:
            changes["department_id"] = self._check_department(data["department_id"])
        if data.get("skill_level") is not None:
            changes["skill_level"] = parse_enum(SkillLevel, data["skill_level"], "skill level")
        if data.get("status") is not None:
            changes["status"] = parse_enum(OperatorStatus, data["status"], "status")

        if not self._operators.update(operator.id, changes=changes, last_active=self._clock()):
            raise NotFoundError("Operator not found")
        return self.get_operator(operator.id)

    def set_status(self, operator_id: Any, status: Any) -> Operator:
        status = parse_enum(OperatorStatus, status, "status")
        operator_id = require_positive_int(operator_id, "Operator ID")

        if not self._operators.set_status(operator_id, status=status, last_active=self._clock()):
            raise NotFoundError("Operator not found")
        logger.info("Operator %s is now %s", operator_id, status.value)
        return self.get_operator(operator_id)

    def delete_operator(self, operator_id: Any) -> Operator:
        operator = self.get_operator(operator_id)
        if not self._operators.delete(operator.id):
            raise NotFoundError("Operator not found")
        logger.info("Deleted operator %s <%s>", operator.id, operator.email)
        return operator

    def _check_department(self, department_id: Any) -> Optional[int]:
        department_id = optional_positive_int(department_id, "Department ID")
        if department_id is not None and not self._departments.get_by_id(department_id):
            raise NotFoundError("Department not found")
        return department_id
