"""Default values for application configuration."""
from __future__ import annotations

DEFAULT_APPLICATION_SETTINGS: dict[str, object] = {
    "SECRET_KEY": "default-secret-key",
    "SESSION_COOKIE_SECURE": False,
    "SESSION_COOKIE_HTTPONLY": True,
    "SESSION_COOKIE_SAMESITE": "Lax",
    "PERMANENT_SESSION_LIFETIME": 1800,
    "FORCE_REQUEST_SCHEME": "",
    "TRUST_FORWARDED_PROTO": False,
    "CSRF_TRUSTED_ORIGINS": [],
    "TOKEN_NAME_FIELD": "token_name",
    "TOKEN_VALUE_FIELD": "token_value",
    "TOKEN_TIME_FIELD": "token_time",
    "ERROR_REPORT_DIRECTORY": "data/error_reports",
    "SAFE_PAGE": "/",
    "LOGIN_URL": "/login",
    "LOGIN_SESSION_KEY": "user_id",
    "DATABASE_URI": "sqlite://",
    "LOG_LEVEL": "INFO",
}

__all__ = ["DEFAULT_APPLICATION_SETTINGS"]
