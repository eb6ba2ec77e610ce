"""Security helpers for page and Ajax views."""

__all__ = [
    "Failure",
    "FailureReason",
    "SessionStore",
    "TimePolicy",
    "current_store",
    "is_same_origin",
]

from .failures import Failure, FailureReason
from .origin import is_same_origin
from .session_store import SessionStore, current_store
from .tokens import TimePolicy
