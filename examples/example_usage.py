"""Example: drive the service layer directly (no Flask, no MySQL).

Marks a day for the demo employees, prints the daily dashboard numbers, then
shows a kiosk engine falling back to local state when the API is down.
"""

from datetime import date

import httpx

from src.hr_attendance.hr_attendance.container import build_client_engine, build_memory_container
from src.hr_attendance.hr_attendance.gateway.http_gateway import HttpPersistenceGateway


def main():
    container = build_memory_container()
    engine = container.attendance_engine

    engine.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")
    engine.mark_attendance("EMP002", "check-in", "2024-06-01T08:55")
    result = engine.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")
    print(result.to_dict())

    print(container.report_service.daily_summary(date(2024, 6, 1)).to_dict())

    def unreachable(request):
        raise httpx.ConnectError("no route to host", request=request)

    kiosk = build_client_engine(
        employees=container.employees_repo,
        gateway=HttpPersistenceGateway("http://localhost:5000/api", transport=httpx.MockTransport(unreachable)),
    )
    offline = kiosk.mark_attendance("EMP003", "check-in", "2024-06-01T09:05")
    print(offline.to_dict(), "pending:", kiosk.pending_count())


if __name__ == "__main__":
    main()
