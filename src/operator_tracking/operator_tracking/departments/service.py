from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get_department(self, department_id: int) -> Department:
        department = self._departments.get_by_id(int(department_id))
        if not department:
            raise NotFoundError("Department not found")
        return department

    def create_department(self, *, name: str, description: Optional[str] = None) -> Department:
        name = require_non_empty(name, "Department name")
        department_id = self._departments.create(name=name, description=optional_text(description))
        logger.info("Created department %s (%s)", department_id, name)
        return Department(id=department_id, name=name, description=optional_text(description))

    def find_department_id(self, name: Optional[str]) -> Optional[int]:
        """Department id for a free-text name, or None when blank or unknown."""
        name = optional_text(name)
        if not name:
            return None
        return self._departments.find_id_by_name(name)
