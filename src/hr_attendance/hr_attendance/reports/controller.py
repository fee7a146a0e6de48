from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import ok
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS


def _date_arg(name: str, default: date) -> date:
    value = (request.args.get(name) or "").strip()
    return parse_iso_date(value) if value else default


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    engine = container.attendance_engine

    def _month_to_date() -> tuple[date, date]:
        today = engine.today()
        return _date_arg("date_from", today.replace(day=1)), _date_arg("date_to", today)

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily")
    def daily():
        return ok(reports.daily_summary(_date_arg("date", engine.today())).to_dict())

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="reports_weekly")
    def weekly():
        start = _date_arg("start", engine.today() - timedelta(days=DEFAULT_REPORT_DAYS - 1))
        return ok(reports.weekly_summary(start).to_dict())

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="reports_attendance")
    def attendance_report():
        today = engine.today()
        report = reports.build_attendance_report(
            start=_date_arg("date_from", today),
            end=_date_arg("date_to", today),
            employee_id=request.args.get("employee_id") or None,
            department=request.args.get("department") or None,
        )
        return ok({"rows": report.rows, "summary": report.summary})

    @app.route("/api/reports/summary", methods=["GET"], endpoint="reports_summary")
    def executive_summary():
        start, end = _month_to_date()
        return ok(reports.executive_summary(start=start, end=end).to_dict())

    @app.route("/api/reports/employees", methods=["GET"], endpoint="reports_employees")
    def employee_performance():
        start, end = _month_to_date()
        rows = reports.employee_performance(
            start=start,
            end=end,
            department=request.args.get("department") or None,
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="reports_monthly")
    def monthly_trends():
        today = engine.today()
        start = _date_arg("date_from", date(today.year, 1, 1))
        end = _date_arg("date_to", today)
        return ok([t.to_dict() for t in reports.monthly_trends(start=start, end=end)])
