"""Utility helpers for issuing and clearing cookies."""
from __future__ import annotations

from typing import Any, Optional

from flask import current_app, request

from pagekit.core.settings import settings
from pagekit.utils.url_helpers import determine_request_scheme

_LOCAL_HTTP_HOSTS = {"localhost", "127.0.0.1", "::1"}


def _resolve_secure_cookie_flag() -> bool:
    """Decide whether cookies should be marked as ``Secure``."""

    configured_secure = settings.session_cookie_secure
    scheme = determine_request_scheme(request)

    if configured_secure:
        if scheme == "https":
            return True

        host = (request.host or "").split(":", 1)[0].lower()
        if host in _LOCAL_HTTP_HOSTS or current_app.debug or current_app.testing:
            current_app.logger.debug(
                "Downgrading cookie Secure flag for local HTTP request.",
                extra={"event": "cookie.insecure", "host": host, "scheme": scheme},
            )
            return False

        return True

    return scheme == "https"


def cookie_options(httponly: bool = True) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(set_options, delete_options)`` for the current request."""

    secure_flag = _resolve_secure_cookie_flag()
    set_options: dict[str, Any] = {
        "httponly": httponly,
        "secure": secure_flag,
    }
    delete_options: dict[str, Any] = {"secure": secure_flag}

    config = current_app.config
    same_site = config.get("SESSION_COOKIE_SAMESITE", "Lax")
    if same_site:
        set_options["samesite"] = same_site

    path = config.get("SESSION_COOKIE_PATH") or "/"
    set_options["path"] = path
    delete_options["path"] = path

    domain = config.get("SESSION_COOKIE_DOMAIN")
    if domain:
        set_options["domain"] = domain
        delete_options["domain"] = domain

    return set_options, delete_options


def set_cookie(
    response,
    name: str,
    value: str,
    max_age: Optional[int] = None,
    *,
    httponly: bool = True,
) -> None:
    if not name:
        raise ValueError("cookie name must not be empty")

    set_options, _ = cookie_options(httponly=httponly)
    if max_age is not None:
        set_options["max_age"] = max_age
    response.set_cookie(name, value, **set_options)


def clear_cookie(response, name: str) -> None:
    _, delete_options = cookie_options()
    response.delete_cookie(name, **delete_options)


__all__ = ["clear_cookie", "cookie_options", "set_cookie"]
