from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import day_key, parse_iso_date
from ..common.responses import fail, ok
from ..container import Container
from ..core.enums import AttendanceStatus


def _date_arg(name: str):
    value = (request.args.get(name) or "").strip()
    return parse_iso_date(value) if value else None


def register(app: Flask, container: Container) -> None:
    engine = container.attendance_engine
    employees = container.employees_repo

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        employee_id = str(data.get("employee_id") or "").strip()
        if not employee_id:
            return fail("employee_id is required")

        result = engine.mark_attendance(
            employee_id,
            data.get("type") or "check-in",
            data.get("timestamp") or None,
        )
        return ok(result.to_dict(), message=f"Attendance marked: {result.outcome.value}")

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def list_attendance():
        records = engine.list_records(
            employee_id=(request.args.get("employee_id") or "").strip() or None,
            date_from=_date_arg("date_from"),
            date_to=_date_arg("date_to"),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/status/<employee_id>", methods=["GET"], endpoint="attendance_status")
    def attendance_status(employee_id: str):
        on = _date_arg("date") or engine.today()
        found = engine.get_status(employee_id, on)
        if isinstance(found, AttendanceStatus):
            return ok({"employee_id": employee_id, "date": day_key(on), "status": found.value, "record": None})
        return ok({"employee_id": employee_id, "date": day_key(on), "status": found.status.value, "record": found.to_dict()})

    @app.route("/api/attendance/logs", methods=["GET"], endpoint="attendance_logs")
    def attendance_logs():
        """All records newest first, labelled with employee names."""
        names = {e.employee_id: e.name for e in employees.list_all()}
        logs = []
        for r in reversed(list(engine.list_records())):
            row = r.to_dict()
            row["employee_name"] = names.get(r.employee_id, "Unknown Employee")
            logs.append(row)
        return ok({"total": len(logs), "logs": logs})
