"""Session based login gate for page views."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional, TypeVar, cast

from flask import redirect
from werkzeug.wrappers import Response

from pagekit.core.settings import settings
from pagekit.security.session_store import SessionStore

F = TypeVar("F", bound=Callable[..., Any])


def is_logged_in(store: SessionStore | None = None) -> bool:
    store = store or SessionStore()
    return store.get(settings.login_session_key) is not None


def log_in(identity: Any, store: SessionStore | None = None) -> None:
    """Mark the session as authenticated for *identity*."""

    if identity is None:
        raise ValueError("identity must not be None")
    store = store or SessionStore()
    store.set(settings.login_session_key, identity)


def log_out(store: SessionStore | None = None) -> bool:
    store = store or SessionStore()
    return store.delete(settings.login_session_key)


def require_login(
    login_url: Optional[str] = None,
    store: SessionStore | None = None,
) -> Optional[Response]:
    """Return a redirect to the login page when the session is anonymous."""

    if is_logged_in(store):
        return None
    target = login_url or settings.login_url
    return redirect(target)


def login_required(view: F) -> F:
    """Redirect anonymous visitors to ``LOGIN_URL`` before running *view*."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any):
        gate = require_login()
        if gate is not None:
            return gate
        return view(*args, **kwargs)

    return cast(F, wrapper)


__all__ = ["is_logged_in", "log_in", "log_out", "login_required", "require_login"]
