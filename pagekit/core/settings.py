"""Centralised application settings abstraction.

This module exposes :class:`ApplicationSettings` which consolidates the
configuration lookups used by the page helpers.  Values are resolved from the
active Flask application's config first, then the process environment (or any
mapping provided), and finally :data:`DEFAULT_APPLICATION_SETTINGS`.

The global :data:`settings` instance should be used for production code, while
tests can instantiate their own :class:`ApplicationSettings` with a dedicated
mapping to validate behaviour in isolation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional, Sequence, cast

from flask import current_app, has_app_context

from pagekit.core.system_settings_defaults import DEFAULT_APPLICATION_SETTINGS

if TYPE_CHECKING:  # pragma: no cover
    from flask import Flask


@dataclass(frozen=True)
class _EnvironmentFacade:
    """Thin wrapper that provides ``Mapping`` compatible access to env vars."""

    source: Mapping[str, str]

    @classmethod
    def from_environ(cls, env: Optional[Mapping[str, str]] = None) -> "_EnvironmentFacade":
        return cls(source=os.environ if env is None else env)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.source.get(key, default)


class ApplicationSettings:
    """Domain level representation of configuration values.

    The class favours explicit properties instead of generic ``get`` access so
    that the rest of the package operates on intent-revealing names.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        self._env = _EnvironmentFacade.from_environ(env)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    def _get(self, key: str, default=None):
        if has_app_context():
            app = cast("Flask", current_app)
            if key in app.config:
                return app.config.get(key)

        value = self._env.get(key)
        if value is not None:
            return value

        if default is None:
            return DEFAULT_APPLICATION_SETTINGS.get(key)
        return default

    def get(self, key: str, default=None):
        """Return the configured value for *key* or *default* if missing."""

        value = self._get(key)
        return default if value is None else value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return a boolean configuration value."""

        value = self._get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            normalised = value.strip().lower()
            if normalised in {"1", "true", "yes", "on"}:
                return True
            if normalised in {"0", "false", "no", "off"}:
                return False
        return default

    def get_list(self, key: str) -> list[str]:
        """Return a list from either a sequence or a comma separated string."""

        value = self._get(key)
        if not value:
            return []
        if isinstance(value, str):
            return [segment.strip() for segment in value.split(",") if segment.strip()]
        return [str(item).strip() for item in value if str(item).strip()]

    # ------------------------------------------------------------------
    # Session and cookies
    # ------------------------------------------------------------------
    @property
    def session_cookie_secure(self) -> bool:
        return self.get_bool("SESSION_COOKIE_SECURE", False)

    @property
    def login_session_key(self) -> str:
        return str(self.get("LOGIN_SESSION_KEY", "user_id"))

    @property
    def login_url(self) -> str:
        return str(self.get("LOGIN_URL", "/login"))

    # ------------------------------------------------------------------
    # Request origin
    # ------------------------------------------------------------------
    @property
    def force_request_scheme(self) -> Optional[str]:
        value = self._get("FORCE_REQUEST_SCHEME")
        return str(value) if value else None

    @property
    def trust_forwarded_proto(self) -> bool:
        return self.get_bool("TRUST_FORWARDED_PROTO", False)

    @property
    def csrf_trusted_origins(self) -> Sequence[str]:
        return tuple(self.get_list("CSRF_TRUSTED_ORIGINS"))

    # ------------------------------------------------------------------
    # Token request fields
    # ------------------------------------------------------------------
    @property
    def token_name_field(self) -> str:
        return str(self.get("TOKEN_NAME_FIELD", "token_name"))

    @property
    def token_value_field(self) -> str:
        return str(self.get("TOKEN_VALUE_FIELD", "token_value"))

    @property
    def token_time_field(self) -> str:
        return str(self.get("TOKEN_TIME_FIELD", "token_time"))

    # ------------------------------------------------------------------
    # Error reports
    # ------------------------------------------------------------------
    @property
    def error_report_directory(self) -> Path:
        return Path(str(self.get("ERROR_REPORT_DIRECTORY", "data/error_reports")))

    @property
    def safe_page(self) -> str:
        return str(self.get("SAFE_PAGE", "/"))

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------
    @property
    def database_uri(self) -> str:
        return str(self.get("DATABASE_URI", "sqlite://"))


settings = ApplicationSettings()

__all__ = ["ApplicationSettings", "settings"]
