"""Gatekeeping helpers for Ajax endpoints.

A typical view::

    @bp.post("/comments")
    def add_comment():
        response = make_response()
        if not ajax.begin(response, "POST", "json"):
            ajax.reject(response)
            return response
        ajax.respond(response, ajax.verify_token("comment_form", "post"))
        return response

Every failure is reduced to ``False`` / HTTP 400.  Which check failed is
logged server-side but never told to the client.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Mapping, Optional, Union

from flask import Request, Response, request

from pagekit.core.logging_config import preview, structured_logger
from pagekit.core.settings import settings
from pagekit.security import tokens
from pagekit.security.failures import FailureReason
from pagekit.security.origin import is_same_origin
from pagekit.security.session_store import SessionStore
from pagekit.security.tokens import TimePolicy

log = structured_logger("pagekit.ajax")


class TokenSource(str, Enum):
    """Where the candidate token value is read from."""

    BODY = "post"
    QUERY = "get"
    COOKIE = "cookie"
    UNIFIED = "request"


_EXTRACTORS: dict[TokenSource, Callable[[Request], Mapping[str, str]]] = {
    TokenSource.BODY: lambda req: req.form,
    TokenSource.QUERY: lambda req: req.args,
    TokenSource.COOKIE: lambda req: req.cookies,
    TokenSource.UNIFIED: lambda req: req.values,
}


def _rejected(reason: FailureReason, **fields) -> bool:
    log.info("ajax.gate.rejected", reason=reason.value, **fields)
    return False


def begin(
    response: Response,
    expected_method: str,
    content_type: str,
    req: Request | None = None,
) -> bool:
    """Check method and origin, then declare the response content type.

    On failure *response* is left untouched.
    """

    req = req or request
    if req.method.upper() != expected_method.upper():
        return _rejected(
            FailureReason.METHOD_MISMATCH,
            method=req.method,
            expected=expected_method.upper(),
            path=req.path,
        )
    if not is_same_origin(req):
        return _rejected(FailureReason.ORIGIN_MISMATCH, path=req.path)

    response.headers["Content-Type"] = f"application/{content_type}"
    return True


def reject(response: Response) -> None:
    response.status_code = 400


def accept(response: Response) -> None:
    response.status_code = 200


def respond(response: Response, ok: bool) -> None:
    if ok:
        accept(response)
    else:
        reject(response)


def _resolve_source(source: Union[TokenSource, str]) -> Optional[TokenSource]:
    if isinstance(source, TokenSource):
        return source
    try:
        return TokenSource(str(source).lower())
    except ValueError:
        return None


def extract_token_value(
    token_name: str,
    source: Union[TokenSource, str],
    req: Request | None = None,
) -> Optional[str]:
    """Return the candidate value for *token_name* from *source*, if present."""

    resolved = _resolve_source(source)
    if resolved is None:
        return None
    value = _EXTRACTORS[resolved](req or request).get(token_name)
    return value or None


def verify_token(
    token_name: str,
    source: Union[TokenSource, str],
    window: Optional[int] = None,
    *,
    policy: TimePolicy = TimePolicy.MAX_AGE,
    req: Request | None = None,
    store: SessionStore | None = None,
) -> bool:
    """Consume the session token *token_name* using the value sent in *source*.

    With *window* the check is time-bound according to *policy*.
    """

    if not token_name:
        return _rejected(FailureReason.MISSING_VALUE)

    resolved = _resolve_source(source)
    if resolved is None:
        return _rejected(FailureReason.MALFORMED_SOURCE, source=str(source))

    candidate = extract_token_value(token_name, resolved, req)
    if candidate is None:
        return _rejected(
            FailureReason.MISSING_VALUE,
            token=preview(token_name, 32),
            source=resolved.value,
        )

    if window is not None:
        try:
            window = int(window)
        except (TypeError, ValueError):
            return _rejected(FailureReason.MALFORMED_SOURCE, window=str(window))

    store = store or SessionStore()
    if window is not None:
        return tokens.process_time(store, candidate, token_name, window, policy)
    return tokens.process(store, candidate, token_name)


def verify_request_token(
    req: Request | None = None,
    store: SessionStore | None = None,
    *,
    policy: TimePolicy = TimePolicy.MAX_AGE,
) -> bool:
    """Validate a token whose name, value and window are all request fields.

    Field names come from ``TOKEN_NAME_FIELD``, ``TOKEN_VALUE_FIELD`` and
    ``TOKEN_TIME_FIELD``.
    """

    req = req or request
    values = req.values
    token_name = values.get(settings.token_name_field)
    token_value = values.get(settings.token_value_field)
    raw_window = values.get(settings.token_time_field)

    if not token_name or not token_value:
        return _rejected(FailureReason.MISSING_VALUE)

    window: Optional[int] = None
    if raw_window not in (None, ""):
        try:
            window = int(raw_window)
        except (TypeError, ValueError):
            return _rejected(FailureReason.MALFORMED_SOURCE, field=settings.token_time_field)

    store = store or SessionStore()
    if window is not None:
        return tokens.process_time(store, token_value, token_name, window, policy)
    return tokens.process(store, token_value, token_name)


class AjaxGate:
    """Per-request handle bundling the request, a response and the session."""

    def __init__(
        self,
        req: Request | None = None,
        store: SessionStore | None = None,
        response: Response | None = None,
    ) -> None:
        self.request = req or request._get_current_object()  # type: ignore[attr-defined]
        self.store = store or SessionStore()
        self.response = response if response is not None else Response()

    def begin(self, expected_method: str, content_type: str) -> bool:
        return begin(self.response, expected_method, content_type, self.request)

    def accept(self) -> Response:
        accept(self.response)
        return self.response

    def reject(self) -> Response:
        reject(self.response)
        return self.response

    def respond(self, ok: bool) -> Response:
        respond(self.response, ok)
        return self.response

    def verify_token(
        self,
        token_name: str,
        source: Union[TokenSource, str],
        window: Optional[int] = None,
        *,
        policy: TimePolicy = TimePolicy.MAX_AGE,
    ) -> bool:
        return verify_token(
            token_name,
            source,
            window,
            policy=policy,
            req=self.request,
            store=self.store,
        )

    def verify_request_token(self, *, policy: TimePolicy = TimePolicy.MAX_AGE) -> bool:
        return verify_request_token(self.request, self.store, policy=policy)


__all__ = [
    "AjaxGate",
    "TokenSource",
    "accept",
    "begin",
    "extract_token_value",
    "reject",
    "respond",
    "verify_request_token",
    "verify_token",
]
