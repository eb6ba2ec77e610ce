from __future__ import annotations

"""Helpers for reasoning about the scheme and origin of a request."""

from typing import Optional
from urllib.parse import urlsplit

from flask import Request, request

from pagekit.core.settings import settings

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _extract_forwarded_proto(forwarded_header: str | None) -> str | None:
    """Parse the ``Forwarded`` header and return the ``proto`` value if present."""

    if not forwarded_header:
        return None

    for part in forwarded_header.split(","):
        for attribute in part.split(";"):
            attribute = attribute.strip()
            if attribute.lower().startswith("proto="):
                value = attribute.split("=", 1)[1].strip().strip('"')
                if value:
                    return value.strip().lower()
    return None


def _extract_x_forwarded_proto(header_value: str | None) -> str | None:
    """Return the first protocol value from ``X-Forwarded-Proto`` if available."""

    if not header_value:
        return None

    proto = header_value.split(",")[0].strip()
    if proto:
        return proto.lower()
    return None


def determine_request_scheme(req: Request | None = None) -> str:
    """Return the scheme the client used to reach the server.

    The resolution order is:

    1. Application setting ``FORCE_REQUEST_SCHEME`` (manual override).
    2. ``Forwarded`` / ``X-Forwarded-Proto`` headers, only when
       ``TRUST_FORWARDED_PROTO`` is enabled.
    3. The request's TLS indicator (``https`` when secure, ``http`` otherwise).
    """

    req = req or request

    forced_scheme = settings.force_request_scheme
    if forced_scheme:
        scheme = str(forced_scheme).strip().lower()
        if scheme:
            return scheme

    if settings.trust_forwarded_proto:
        forwarded_proto = _extract_forwarded_proto(req.headers.get("Forwarded"))
        if forwarded_proto:
            return forwarded_proto

        x_forwarded_proto = _extract_x_forwarded_proto(req.headers.get("X-Forwarded-Proto"))
        if x_forwarded_proto:
            return x_forwarded_proto

    return "https" if req.is_secure else "http"


def normalize_origin(value: str | None) -> Optional[str]:
    """Reduce a URL or origin to ``scheme://host[:port]``.

    Default ports are dropped and everything is lower-cased.  Returns ``None``
    when *value* does not carry both a scheme and a host.
    """

    if not value:
        return None
    try:
        parts = urlsplit(value.strip())
        port = parts.port
    except ValueError:
        return None

    scheme = (parts.scheme or "").lower()
    host = (parts.hostname or "").lower()
    if not scheme or not host:
        return None

    if ":" in host:
        host = f"[{host}]"
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


__all__ = ["determine_request_scheme", "normalize_origin"]
