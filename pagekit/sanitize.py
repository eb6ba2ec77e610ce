"""Output escaping and simple value checks for user supplied input."""

from __future__ import annotations

import ipaddress
import re
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Union

from markupsafe import Markup, escape


class Indicator(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    PASSWORD_STRONG = "password_strong"
    IP = "ip"
    ADDRESS = "address"


_PHONE_RE = re.compile(r"\+?\d{9,15}")
_EMAIL_RE = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+"
)
_PASSWORD_RE = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}"
)
_ADDRESS_RE = re.compile(r"[a-zA-Z0-9\s.,]+")


def scope(data: Mapping[str, Any]) -> Dict[str, str]:
    """HTML-escape every value of *data*, quotes included."""

    return {key: str(escape("" if value is None else value)) for key, value in data.items()}


def sanitize(value: Any) -> str:
    """Strip markup and NUL bytes; quotes and non-Latin letters are kept.

    ``striptags`` unescapes entities, so it is repeated until nothing changes
    to keep encoded markup from surviving as real tags.
    """

    if value is None:
        return ""
    text = str(value).replace("\x00", "")
    while True:
        stripped = str(Markup(text).striptags())
        if stripped == text:
            return stripped
        text = stripped


def _is_phone(value: str) -> bool:
    return _PHONE_RE.fullmatch(value) is not None


def _is_email(value: str) -> bool:
    if len(value) > 254 or value.count("@") != 1:
        return False
    local = value.split("@", 1)[0]
    if local.startswith(".") or local.endswith(".") or ".." in local:
        return False
    return _EMAIL_RE.fullmatch(value) is not None


def _is_strong_password(value: str) -> bool:
    return _PASSWORD_RE.fullmatch(value) is not None


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _is_address(value: str) -> bool:
    return _ADDRESS_RE.fullmatch(value) is not None


_CHECKS: Dict[Indicator, Callable[[str], bool]] = {
    Indicator.PHONE: _is_phone,
    Indicator.EMAIL: _is_email,
    Indicator.PASSWORD_STRONG: _is_strong_password,
    Indicator.IP: _is_ip,
    Indicator.ADDRESS: _is_address,
}


def check(value: Any, indicator: Union[Indicator, str]) -> bool:
    """Validate *value* against *indicator*; unknown indicators never pass."""

    try:
        resolved = Indicator(indicator)
    except ValueError:
        return False
    if not isinstance(value, str):
        return False
    return _CHECKS[resolved](value)


__all__ = ["Indicator", "check", "sanitize", "scope"]
