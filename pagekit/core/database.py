"""Thin parameterised query wrapper over a SQLAlchemy engine.

Every query method returns ``None`` on failure and keeps the exception on
:attr:`Database.exception` so page code can decide how to report it.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from pagekit.core.settings import settings

logger = logging.getLogger("pagekit.core.database")

Params = Optional[Mapping[str, Any]]


class Database:
    """Query wrapper bound to *url*, or to ``DATABASE_URI`` when omitted."""

    def __init__(self, url: Optional[str] = None, **engine_options: Any) -> None:
        self.url = url or settings.database_uri
        self.engine: Optional[Engine] = None
        self.exception: Optional[SQLAlchemyError] = None
        self.connected = self._connect(engine_options)

    def _connect(self, engine_options: Dict[str, Any]) -> bool:
        try:
            engine = create_engine(self.url, **engine_options)
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            self._record(exc, "db.connect_failed")
            return False
        self.engine = engine
        return True

    def _record(self, exc: SQLAlchemyError, event: str) -> None:
        self.exception = exc
        logger.error(
            "Database operation failed: %s",
            exc.__class__.__name__,
            exc_info=exc,
            extra={"event": event},
        )

    def _fetch(self, sql: str, params: Params) -> Optional[List[Row]]:
        if self.engine is None:
            return None
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                if not result.returns_rows:
                    return []
                return list(result.fetchall())
        except SQLAlchemyError as exc:
            self._record(exc, "db.query_failed")
            return None

    def query(self, sql: str, params: Params = None) -> Optional[List[Dict[str, Any]]]:
        """Return every row as a column-name dictionary."""

        rows = self._fetch(sql, params)
        if rows is None:
            return None
        return [dict(row._mapping) for row in rows]

    def query_single(self, sql: str, params: Params = None) -> Optional[Dict[str, Any]]:
        """Return the first row as a dictionary, or an empty dict when there is none."""

        rows = self._fetch(sql, params)
        if rows is None:
            return None
        return dict(rows[0]._mapping) if rows else {}

    def query_objects(self, sql: str, params: Params = None) -> Optional[List[SimpleNamespace]]:
        rows = self._fetch(sql, params)
        if rows is None:
            return None
        return [SimpleNamespace(**dict(row._mapping)) for row in rows]

    def query_num(self, sql: str, params: Params = None) -> Optional[List[Tuple[Any, ...]]]:
        rows = self._fetch(sql, params)
        if rows is None:
            return None
        return [tuple(row) for row in rows]

    def query_both(self, sql: str, params: Params = None) -> Optional[List[Dict[Any, Any]]]:
        """Return rows addressable both by column name and by position."""

        rows = self._fetch(sql, params)
        if rows is None:
            return None
        combined: List[Dict[Any, Any]] = []
        for row in rows:
            entry: Dict[Any, Any] = dict(row._mapping)
            entry.update(enumerate(tuple(row)))
            combined.append(entry)
        return combined

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


__all__ = ["Database"]
