from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, UnknownEmployee

logger = logging.getLogger(__name__)


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    return jsonify({"success": True, "data": data, "message": message}), status


def fail(message: str, *, status: int = 400, errors: Any = None):
    body = {"success": False, "data": None, "message": message}
    if errors is not None:
        body["errors"] = errors
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(UnknownEmployee)
    def _unknown_employee(exc: UnknownEmployee):
        return fail(str(exc), status=404)

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return fail(str(exc), status=400)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return fail(exc.description or exc.name, status=exc.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return fail("Internal server error", status=500)
