"""Import operators from a CSV file without going through the HTTP API.

Usage: python scripts/import_operators.py operators.csv
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.operator_tracking.operator_tracking.container import build_container


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("csv_file", type=Path, help="CSV with name,email,employee_id,department_name,skill_level")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG))
    with args.csv_file.open(encoding="utf-8-sig", newline="") as f:
        result = container.import_service.import_csv(f)

    print(f"{result.message} ({result.created} created, {result.updated} updated)")
    for error in result.errors:
        print(f"  {error}")
    return 0 if not result.errors else 1


if __name__ == "__main__":
    sys.exit(main())
