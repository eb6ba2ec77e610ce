"""Centralized HTTP error handling for page and Ajax requests."""

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from pagekit.core.reporting import handle_exception
from pagekit.core.settings import settings


def _is_ajax_request() -> bool:
    """Return True when the current request expects a machine readable reply."""

    if request.headers.get("X-Requested-With", "").lower() == "xmlhttprequest":
        return True
    path = request.path or ""
    if path == "/api" or path.startswith("/api/"):
        return True
    best = request.accept_mimetypes.best
    return best == "application/json"


def _handle_http_error(error: HTTPException):
    code = error.code or 500
    logger = current_app.logger.error if code >= 500 else current_app.logger.warning
    logger(
        "%s %s (%s)",
        code,
        request.path,
        request.remote_addr,
        extra={"event": "http.error", "status": code},
    )

    if _is_ajax_request():
        message = error.name if code < 500 else "Internal Server Error"
        response = jsonify({"status": "error", "code": code, "message": message})
        response.status_code = code
        return response

    return error


def _handle_unexpected_error(error: Exception):
    current_app.logger.exception(
        "Unhandled exception on %s %s",
        request.method,
        request.path,
        extra={"event": "http.unhandled"},
    )

    if _is_ajax_request():
        handle_exception(error, settings.safe_page, settings.error_report_directory)
        response = jsonify({"status": "error", "code": 500, "message": "Internal Server Error"})
        response.status_code = 500
        return response

    return handle_exception(error, settings.safe_page, settings.error_report_directory)


def register_error_handlers(app):
    """Register global error handlers.

    HTTP errors keep their status; Ajax callers get a JSON body.  Any other
    exception is written to the error-report directory and the client is sent
    to ``SAFE_PAGE``.
    """

    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected_error)


__all__ = ["register_error_handlers"]
