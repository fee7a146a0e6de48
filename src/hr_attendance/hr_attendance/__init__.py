"""HR Attendance package.

Organized by feature modules (employees, attendance, gateway, reports) with a
thin Flask controller layer over service/repository layers.
"""
