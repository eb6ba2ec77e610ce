"""Logging configuration for the page helpers."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from flask import Flask


_CONSOLE_HANDLER_ATTR = "_is_pagekit_console_handler"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_app_logging(app: "Flask", level: Optional[str] = None) -> logging.Logger:
    """Attach a stdout handler to ``app.logger`` and the ``pagekit`` logger."""

    level_name = (level or app.config.get("LOG_LEVEL") or "INFO").upper()
    if app.debug:
        level_name = "DEBUG"
    numeric_level = getattr(logging, level_name, logging.INFO)

    for logger in (app.logger, logging.getLogger("pagekit")):
        if not any(getattr(h, _CONSOLE_HANDLER_ATTR, False) for h in logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            setattr(handler, _CONSOLE_HANDLER_ATTR, True)
            logger.addHandler(handler)
        logger.setLevel(numeric_level)

    return app.logger


def preview(value: Optional[str], length: int = 8) -> str:
    """Return a short, log-safe preview of *value*."""

    if not value:
        return ""
    text = str(value)
    if len(text) <= length:
        return text
    return f"{text[:length]}…"


class StructuredLogger:
    """Helper for emitting structured JSON log entries."""

    def __init__(self, logger: logging.Logger, defaults: Optional[Mapping[str, Any]] = None):
        self._logger = logger
        self._defaults: Dict[str, Any] = dict(defaults or {})

    def _emit(self, level: int, event: str, /, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "event": event,
            "level": logging.getLevelName(level),
        }
        payload.update(self._defaults)
        payload.update(fields)
        message = json.dumps(payload, ensure_ascii=False, default=str)
        self._logger.log(level, message, extra={"event": event})

    def debug(self, event: str, /, **fields: Any) -> None:
        self._emit(logging.DEBUG, event, **fields)

    def info(self, event: str, /, **fields: Any) -> None:
        self._emit(logging.INFO, event, **fields)


def structured_logger(logger_name: str, **defaults: Any) -> StructuredLogger:
    """Return a :class:`StructuredLogger` for *logger_name*."""

    return StructuredLogger(logging.getLogger(logger_name), defaults)


__all__ = [
    "StructuredLogger",
    "configure_app_logging",
    "preview",
    "structured_logger",
]
