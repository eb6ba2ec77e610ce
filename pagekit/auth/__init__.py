"""Authentication helpers for page views."""

from .login_gate import is_logged_in, log_in, log_out, login_required, require_login

__all__ = ["is_logged_in", "log_in", "log_out", "login_required", "require_login"]
