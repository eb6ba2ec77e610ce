"""Exception-to-error-report sink.

Reports are JSON files named after an md5 of the error's message, code and
origin, so the same failure raised repeatedly produces a single file.
"""

from __future__ import annotations

import hashlib
import json
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

from flask import redirect
from werkzeug.wrappers import Response

logger = logging.getLogger("pagekit.core.reporting")


def _origin(exc: BaseException) -> Tuple[str, int]:
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    if not frames:
        return "", 0
    last = frames[-1]
    return last.filename, last.lineno or 0


def _code(exc: BaseException) -> Any:
    code = getattr(exc, "code", None)
    if code is None:
        code = getattr(exc, "errno", None)
    return 0 if code is None else code


def _trace(exc: BaseException) -> List[Dict[str, Any]]:
    if not exc.__traceback__:
        return []
    return [
        {"file": frame.filename, "line": frame.lineno, "function": frame.name}
        for frame in traceback.extract_tb(exc.__traceback__)
    ]


def error_hash(exc: BaseException) -> str:
    """Return the deduplication key for *exc*."""

    file, line = _origin(exc)
    material = f"{exc}{_code(exc)}{file}{line}"
    return hashlib.md5(material.encode("utf-8")).hexdigest()


def build_error_report(exc: BaseException) -> Dict[str, Any]:
    file, line = _origin(exc)
    return {
        "message": str(exc),
        "type": type(exc).__name__,
        "code": _code(exc),
        "file": file,
        "line": line,
        "trace": _trace(exc),
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    }


def write_error_report(exc: BaseException, directory: Path | str) -> Path:
    """Persist a report for *exc* unless an identical one already exists."""

    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{error_hash(exc)}.json"
    if path.exists():
        logger.debug(
            "Error report already recorded",
            extra={"event": "report.duplicate", "path": str(path)},
        )
        return path

    report = build_error_report(exc)
    path.write_text(json.dumps(report, ensure_ascii=False, default=str), encoding="utf-8")
    logger.info(
        "Error report written",
        extra={"event": "report.written", "path": str(path)},
    )
    return path


def handle_exception(exc: BaseException, safe_page: str, directory: Path | str) -> Response:
    """Record *exc* and send the client to *safe_page*."""

    try:
        write_error_report(exc, directory)
    except OSError:
        logger.exception(
            "Failed to write error report",
            extra={"event": "report.write_failed", "directory": str(directory)},
        )
    return redirect(safe_page)


__all__ = [
    "build_error_report",
    "error_hash",
    "handle_exception",
    "write_error_report",
]
