"""Named single-use anti-forgery tokens stored in the session.

A token called ``name`` occupies sibling session entries::

    name          -> 64 character hex value
    name_time     -> creation timestamp (seconds)
    name_count    -> attempt counter      (process_limited only)
    name_timer    -> escalation level     (process_limited only)

Every ``process*`` function consumes the token on success so the same value
cannot be replayed.  None of the functions raise for unknown names; they
return a :class:`~pagekit.security.failures.Failure` or ``False``.

The read-modify-write in :func:`process_limited` is not atomic across
concurrent requests sharing one session.
"""

from __future__ import annotations

import hmac
import re
import secrets
from enum import Enum
from typing import Optional, Union

from pagekit.core.logging_config import preview, structured_logger
from pagekit.security.failures import Failure, FailureReason
from pagekit.security.session_store import SessionStore

TOKEN_BYTES = 32
TIME_SUFFIX = "_time"
COUNT_SUFFIX = "_count"
TIMER_SUFFIX = "_timer"

_TOKEN_PATTERN = re.compile(r"[0-9a-f]{64}")

log = structured_logger("pagekit.security.tokens")


class TimePolicy(str, Enum):
    """How the window passed to :func:`process_time` is interpreted."""

    MIN_DELAY = "min_delay"
    MAX_AGE = "max_age"


def _time_key(name: str) -> str:
    return name + TIME_SUFFIX


def _count_key(name: str) -> str:
    return name + COUNT_SUFFIX


def _timer_key(name: str) -> str:
    return name + TIMER_SUFFIX


def is_token_value(value: object) -> bool:
    """Return True when *value* has the token wire format."""

    return isinstance(value, str) and _TOKEN_PATTERN.fullmatch(value) is not None


def _new_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def _matches(candidate: object, stored: object) -> bool:
    if not isinstance(candidate, str) or not isinstance(stored, str):
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), stored.encode("utf-8"))


def _elapsed(store: SessionStore, name: str) -> int:
    now = store.now()
    created = store.get(_time_key(name))
    try:
        return now - int(created)
    except (TypeError, ValueError):
        return 0


def _live_value(store: SessionStore, name: str) -> Optional[str]:
    """Return the stored token for *name*, or None if no live token exists.

    Session entries that lack the token format or a creation time are not
    tokens and are never reported as live.
    """

    value = store.get(name)
    if not is_token_value(value) or not store.contains(_time_key(name)):
        return None
    return value


def _reject(name: str, reason: FailureReason, **fields) -> bool:
    log.info("csrf.token.rejected", token=preview(name, 32), reason=reason.value, **fields)
    return False


def create(store: SessionStore, name: str) -> Union[str, Failure]:
    """Generate and store a token; fail if *name* already holds one."""

    if _live_value(store, name) is not None:
        log.debug("csrf.token.exists", token=preview(name, 32))
        return Failure(FailureReason.ALREADY_EXISTS)

    token = _new_token()
    store.set(name, token)
    store.set(_time_key(name), store.now())
    log.debug("csrf.token.created", token=preview(name, 32))
    return token


def get(store: SessionStore, name: str) -> Union[str, Failure]:
    """Return the live value for *name* without consuming it."""

    value = _live_value(store, name)
    if value is None:
        return Failure(FailureReason.NOT_FOUND)
    return value


def unset_token(store: SessionStore, name: str) -> bool:
    """Remove the value and creation time, leaving rate-limit counters."""

    if _live_value(store, name) is None:
        return False
    store.delete(name)
    store.delete(_time_key(name))
    return True


def delete(store: SessionStore, name: str) -> bool:
    """Remove the token together with any rate-limit counters."""

    removed = unset_token(store, name)
    removed = store.delete(_count_key(name)) or removed
    removed = store.delete(_timer_key(name)) or removed
    return removed


def check(store: SessionStore, candidate: Optional[str], name: str) -> Optional[Failure]:
    """Compare *candidate* with the live token without consuming it."""

    stored = _live_value(store, name)
    if stored is None:
        return Failure(FailureReason.NOT_FOUND)
    if not _matches(candidate, stored):
        return Failure(FailureReason.MISMATCH)
    return None


def process(store: SessionStore, candidate: Optional[str], name: str) -> bool:
    failure = check(store, candidate, name)
    if failure is not None:
        return _reject(name, failure.reason)

    delete(store, name)
    log.debug("csrf.token.accepted", token=preview(name, 32))
    return True


def process_min_delay(store: SessionStore, candidate: Optional[str], name: str, window: int) -> bool:
    """Accept only once at least *window* seconds have passed since creation.

    A premature attempt leaves the token in place so it can be retried.
    """

    failure = check(store, candidate, name)
    if failure is not None:
        return _reject(name, failure.reason)

    elapsed = _elapsed(store, name)
    if elapsed < window:
        return _reject(name, FailureReason.TOO_EARLY, elapsed=elapsed, window=window)

    delete(store, name)
    log.debug("csrf.token.accepted", token=preview(name, 32), elapsed=elapsed)
    return True


def process_max_age(store: SessionStore, candidate: Optional[str], name: str, window: int) -> bool:
    """Accept only while no more than *window* seconds have passed.

    An expired token can never succeed again, so it is evicted.
    """

    failure = check(store, candidate, name)
    if failure is not None:
        return _reject(name, failure.reason)

    elapsed = _elapsed(store, name)
    if elapsed > window:
        delete(store, name)
        return _reject(name, FailureReason.EXPIRED, elapsed=elapsed, window=window)

    delete(store, name)
    log.debug("csrf.token.accepted", token=preview(name, 32), elapsed=elapsed)
    return True


def process_time(
    store: SessionStore,
    candidate: Optional[str],
    name: str,
    window: int,
    policy: TimePolicy = TimePolicy.MAX_AGE,
) -> bool:
    if TimePolicy(policy) is TimePolicy.MIN_DELAY:
        return process_min_delay(store, candidate, name, window)
    return process_max_age(store, candidate, name, window)


def process_limited(
    store: SessionStore,
    candidate: Optional[str],
    name: str,
    base_window: int,
    step_every: int,
    reset_threshold: int,
) -> bool:
    """Validate with an escalating minimum dwell time.

    Each attempt against a live token bumps the hit counter; every
    *step_every* hits raise the escalation level by one, and the required
    dwell time is ``base_window + level`` seconds.  Once more than
    *reset_threshold* seconds have passed since creation the counter and level
    start again from zero.
    """

    if _live_value(store, name) is None:
        return _reject(name, FailureReason.NOT_FOUND)

    elapsed = _elapsed(store, name)
    count = int(store.get(_count_key(name), 0) or 0)
    level = int(store.get(_timer_key(name), 0) or 0)

    if elapsed > reset_threshold:
        count = 0
        level = 0

    count += 1
    if count >= step_every:
        level += 1
        count = 0

    store.set(_count_key(name), count)
    store.set(_timer_key(name), level)

    failure = check(store, candidate, name)
    if failure is not None:
        return _reject(name, failure.reason, escalation=level)

    required = base_window + level
    if elapsed < required:
        return _reject(
            name,
            FailureReason.RATE_LIMITED,
            elapsed=elapsed,
            required=required,
            escalation=level,
        )

    delete(store, name)
    log.debug("csrf.token.accepted", token=preview(name, 32), elapsed=elapsed, escalation=level)
    return True


__all__ = [
    "TOKEN_BYTES",
    "TimePolicy",
    "check",
    "create",
    "delete",
    "get",
    "is_token_value",
    "process",
    "process_limited",
    "process_max_age",
    "process_min_delay",
    "process_time",
    "unset_token",
]
