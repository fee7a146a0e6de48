"""Kiosk-side mark: ``python scripts/mark_attendance.py EMP001 check-in [2024-06-01T09:15]``.

Uses the client engine, so a down API still records the mark locally and
reports ``synced=False``. Unsynced events are kept in PENDING_SPOOL_PATH and
replayed on the next run.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

import httpx

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_attendance.hr_attendance.attendance.spool import PendingSpool, mark_with_spool
from src.hr_attendance.hr_attendance.container import DEMO_EMPLOYEES, build_client_engine
from src.hr_attendance.hr_attendance.core.constants import DEFAULT_PENDING_SPOOL
from src.hr_attendance.hr_attendance.core.enums import EmployeeStatus
from src.hr_attendance.hr_attendance.core.exceptions import DomainError
from src.hr_attendance.hr_attendance.employees.memory_employee_repository import InMemoryEmployeeDirectory
from src.hr_attendance.hr_attendance.employees.model import Employee

logger = logging.getLogger("mark_attendance")


def load_directory(base_url: str, timeout: float) -> InMemoryEmployeeDirectory:
    try:
        resp = httpx.get(f"{base_url.rstrip('/')}/employees", timeout=timeout)
        resp.raise_for_status()
        items = resp.json().get("data") or []
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Employee list unavailable (%s); using built-in demo employees", exc)
        return InMemoryEmployeeDirectory(DEMO_EMPLOYEES)

    return InMemoryEmployeeDirectory(
        Employee(
            employee_id=item["employee_id"],
            name=item["name"],
            department=item["department"],
            email=item.get("email"),
            position=item.get("position"),
            status=EmployeeStatus(item.get("status") or "active"),
        )
        for item in items
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("employee_id")
    parser.add_argument("type", choices=["check-in", "check-out"])
    parser.add_argument("timestamp", nargs="?")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    settings = importlib.import_module(get_settings_module())

    directory = load_directory(settings.REMOTE_API_URL, settings.REMOTE_TIMEOUT_SECONDS)
    engine = build_client_engine(employees=directory, settings=settings)
    spool = PendingSpool(getattr(settings, "PENDING_SPOOL_PATH", DEFAULT_PENDING_SPOOL))
    try:
        result = mark_with_spool(engine, spool, args.employee_id, args.type, args.timestamp)
    except DomainError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
