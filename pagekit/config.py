import os

from dotenv import load_dotenv

from pagekit.core.system_settings_defaults import DEFAULT_APPLICATION_SETTINGS

load_dotenv()


def _setting(name: str):
    return os.environ.get(name, DEFAULT_APPLICATION_SETTINGS.get(name))


def _bool_setting(name: str) -> bool:
    value = _setting(name)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class Config:
    """Flask configuration populated from the environment and defaults."""

    SECRET_KEY = _setting("SECRET_KEY")

    # Session settings
    PERMANENT_SESSION_LIFETIME = int(_setting("PERMANENT_SESSION_LIFETIME"))
    SESSION_COOKIE_SECURE = _bool_setting("SESSION_COOKIE_SECURE")
    SESSION_COOKIE_HTTPONLY = _bool_setting("SESSION_COOKIE_HTTPONLY")
    SESSION_COOKIE_SAMESITE = _setting("SESSION_COOKIE_SAMESITE")

    # Request origin
    FORCE_REQUEST_SCHEME = _setting("FORCE_REQUEST_SCHEME")
    TRUST_FORWARDED_PROTO = _bool_setting("TRUST_FORWARDED_PROTO")
    CSRF_TRUSTED_ORIGINS = _setting("CSRF_TRUSTED_ORIGINS")

    # Token request fields
    TOKEN_NAME_FIELD = _setting("TOKEN_NAME_FIELD")
    TOKEN_VALUE_FIELD = _setting("TOKEN_VALUE_FIELD")
    TOKEN_TIME_FIELD = _setting("TOKEN_TIME_FIELD")

    # Error reports and redirects
    ERROR_REPORT_DIRECTORY = _setting("ERROR_REPORT_DIRECTORY")
    SAFE_PAGE = _setting("SAFE_PAGE")
    LOGIN_URL = _setting("LOGIN_URL")
    LOGIN_SESSION_KEY = _setting("LOGIN_SESSION_KEY")

    DATABASE_URI = _setting("DATABASE_URI")
    LOG_LEVEL = _setting("LOG_LEVEL")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    DATABASE_URI = "sqlite://"
