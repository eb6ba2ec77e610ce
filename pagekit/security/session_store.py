"""Session-scoped key/value adapter used by the token registry."""

from __future__ import annotations

import time
from typing import Any, Callable, MutableMapping, Optional, Union

from flask import session
from flask.sessions import SessionMixin

SessionBacking = Union[MutableMapping[str, Any], Callable[[], MutableMapping[str, Any]]]

_MISSING = object()


def _flask_session() -> MutableMapping[str, Any]:
    return session._get_current_object()  # type: ignore[attr-defined]


class SessionStore:
    """Key/value view over one client's session.

    ``backing`` is either a mapping or a zero-argument factory returning one;
    the factory is resolved once, on first use.  Without a backing the Flask
    ``session`` of the active request is used.  ``clock`` supplies the wall
    time used for token timestamps.
    """

    def __init__(
        self,
        backing: Optional[SessionBacking] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._backing = backing if backing is not None else _flask_session
        self._data: Optional[MutableMapping[str, Any]] = None
        self._clock = clock

    def init_if_absent(self) -> MutableMapping[str, Any]:
        if self._data is None:
            backing = self._backing
            if callable(backing) and not isinstance(backing, MutableMapping):
                backing = backing()
            self._data = backing
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self.init_if_absent().get(key, default)

    def contains(self, key: str) -> bool:
        return self.init_if_absent().get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        data = self.init_if_absent()
        data[key] = value
        self._mark_modified(data)

    def delete(self, key: str) -> bool:
        data = self.init_if_absent()
        if key not in data:
            return False
        del data[key]
        self._mark_modified(data)
        return True

    def now(self) -> int:
        return int(self._clock())

    @staticmethod
    def _mark_modified(data: MutableMapping[str, Any]) -> None:
        if isinstance(data, SessionMixin):
            data.modified = True


def current_store(clock: Callable[[], float] = time.time) -> SessionStore:
    """Return a store bound to the Flask session of the active request."""

    return SessionStore(clock=clock)


__all__ = ["SessionStore", "current_store"]
