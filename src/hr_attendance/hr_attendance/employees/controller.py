from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import fail, ok
from ..container import Container
from ..core.enums import EmployeeStatus
from ..core.exceptions import ValidationError


def _payload_fields(data: dict) -> dict:
    fields = {k: data[k] for k in ("name", "department", "email", "position", "status") if k in data}
    if "join_date" in data:
        fields["join_date"] = parse_iso_date(data["join_date"]) if data["join_date"] else None
    if "status" in fields:
        try:
            fields["status"] = EmployeeStatus(fields["status"])
        except ValueError as exc:
            raise ValidationError(f"Invalid status: {fields['status']!r}") from exc
    return fields


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def list_employees():
        return ok([e.to_dict() for e in service.list_employees()])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def create_employee():
        data = request.get_json(silent=True) or {}
        fields = _payload_fields(data)
        for required in ("name", "department"):
            fields.setdefault(required, "")
        employee = service.add_employee(employee_id=str(data.get("employee_id") or ""), **fields)
        return ok(employee.to_dict(), message="Employee created", status=201)

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    def get_employee(employee_id: str):
        return ok(service.get_employee(employee_id).to_dict())

    @app.route("/api/employees/<employee_id>", methods=["PUT", "PATCH"], endpoint="employees_update")
    def update_employee(employee_id: str):
        data = request.get_json(silent=True) or {}
        fields = _payload_fields(data)
        if not fields:
            return fail("Nothing to update")
        return ok(service.update_employee(employee_id, **fields).to_dict(), message="Employee updated")

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def delete_employee(employee_id: str):
        removed = service.delete_employee(employee_id)
        return ok({"employee_id": employee_id, "attendance_removed": removed}, message="Employee deleted")
