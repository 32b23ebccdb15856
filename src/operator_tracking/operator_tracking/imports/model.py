from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ImportResult:
    """Outcome of a bulk operator import. `errors` keeps input order."""

    imported: int = 0
    created: int = 0
    updated: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Import completed. {self.imported} operators imported."
