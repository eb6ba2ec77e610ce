"""Same-origin check for state-changing requests.

The check fails closed: the ``Origin`` header is preferred, ``Referer`` is
used only when ``Origin`` is absent (or the opaque ``null``), and a request
with neither is rejected.  The declared origin is compared with the server's
own scheme and ``Host``.
"""

from __future__ import annotations

from typing import Optional

from flask import Request, request

from pagekit.core.logging_config import structured_logger
from pagekit.core.settings import settings
from pagekit.utils.url_helpers import determine_request_scheme, normalize_origin

log = structured_logger("pagekit.security.origin")


def request_origin(req: Request | None = None) -> Optional[str]:
    """Return the normalised origin the client declares, if any."""

    req = req or request
    origin = (req.headers.get("Origin") or "").strip()
    if origin and origin != "null":
        return normalize_origin(origin)
    return normalize_origin(req.headers.get("Referer"))


def server_origin(req: Request | None = None) -> Optional[str]:
    """Return the normalised origin this server answers on."""

    req = req or request
    host = req.host
    if not host:
        return None
    return normalize_origin(f"{determine_request_scheme(req)}://{host}")


def is_same_origin(req: Request | None = None) -> bool:
    req = req or request
    declared = request_origin(req)
    if declared is None:
        log.info("origin.missing", path=req.path)
        return False

    expected = server_origin(req)
    if expected is not None and declared == expected:
        return True

    trusted = {normalize_origin(item) for item in settings.csrf_trusted_origins}
    if declared in trusted:
        return True

    log.info("origin.mismatch", path=req.path, declared=declared, expected=expected)
    return False


__all__ = ["is_same_origin", "request_origin", "server_origin"]
