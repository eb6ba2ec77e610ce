"""Failure sentinels returned by the token registry and request gate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    MISMATCH = "mismatch"
    EXPIRED = "expired"
    TOO_EARLY = "too_early"
    RATE_LIMITED = "rate_limited"
    MALFORMED_SOURCE = "malformed_source"
    MISSING_VALUE = "missing_value"
    ORIGIN_MISMATCH = "origin_mismatch"
    METHOD_MISMATCH = "method_mismatch"


@dataclass(frozen=True)
class Failure:
    """Falsy result carrying the reason an operation did not succeed.

    Callers that only care about success can keep writing ``if not result``;
    the reason is there for logging and tests.
    """

    reason: FailureReason

    def __bool__(self) -> bool:
        return False


__all__ = ["Failure", "FailureReason"]
