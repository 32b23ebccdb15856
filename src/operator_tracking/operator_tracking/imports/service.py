from __future__ import annotations

import csv
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, TextIO

from ..common.validators import optional_text, parse_enum
from ..core.constants import IMPORT_COLUMNS
from ..core.enums import SkillLevel
from ..core.exceptions import DomainError, StoreUnavailableError, ValidationError
from ..departments.service import DepartmentService
from ..operators.repository import OperatorRepository
from .model import ImportResult

logger = logging.getLogger(__name__)


class OperatorImportService:
    """Bulk upsert of operators keyed by email.

    Each row is applied in its own transaction; a bad row is reported and
    skipped without affecting the others. Imported values win over stored ones.
    """

    def __init__(self, operators: OperatorRepository, departments: DepartmentService):
        self._operators = operators
        self._departments = departments

    def import_csv(self, stream: TextIO) -> ImportResult:
        reader = csv.DictReader(stream)
        if not reader.fieldnames:
            raise ValidationError("CSV file is empty")

        reader.fieldnames = [(h or "").strip().lower() for h in reader.fieldnames]
        missing = [c for c in ("name", "email") if c not in reader.fieldnames]
        if missing:
            raise ValidationError(f"CSV is missing required column(s): {', '.join(missing)}")

        # Header is line 1, so data rows start at 2.
        return self.import_rows(reader, first_row_number=2)

    def import_rows(self, rows: Iterable[Mapping[str, Any]], *, first_row_number: int = 1) -> ImportResult:
        result = ImportResult()
        department_ids: Dict[str, Optional[int]] = {}

        for number, row in enumerate(rows, start=first_row_number):
            name = optional_text(row.get("name"))
            email = optional_text(row.get("email"))
            if not name or not email:
                result.errors.append(f"Row {number} skipped: missing name or email")
                continue

            try:
                skill = _skill_level(row.get("skill_level"))
                department_id = self._department_id(row.get("department_name"), department_ids)
                _, created = self._operators.upsert_by_email(
                    name=name,
                    email=email,
                    employee_id=optional_text(row.get("employee_id")),
                    department_id=department_id,
                    skill_level=skill,
                )
            # Losing the store aborts the batch; any other error fails only this row.
            except StoreUnavailableError:
                raise
            except DomainError as e:
                logger.warning("Import row %s (%s) failed: %s", number, email, e)
                result.errors.append(f"Row {number} failed ({email}): {e}")
                continue

            result.imported += 1
            if created:
                result.created += 1
            else:
                result.updated += 1

        logger.info(
            "Operator import: %d imported (%d new, %d updated), %d errors",
            result.imported, result.created, result.updated, len(result.errors),
        )
        return result

    def _department_id(self, department_name: Any, cache: Dict[str, Optional[int]]) -> Optional[int]:
        name = optional_text(department_name)
        if not name:
            return None
        key = name.lower()
        if key not in cache:
            # Unknown departments are not an error: the operator is imported without one.
            cache[key] = self._departments.find_department_id(name)
        return cache[key]


def _skill_level(value: Any) -> SkillLevel:
    if not optional_text(value):
        return SkillLevel.BEGINNER
    return parse_enum(SkillLevel, value, "skill level")


def template_header() -> str:
    return ",".join(IMPORT_COLUMNS)
