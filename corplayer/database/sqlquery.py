"""A prepared statement with named bindings and a readable executed form."""

from __future__ import annotations

import datetime as _dt
import numbers
import sqlite3
from enum import Enum
from typing import Any, Iterator


def _param_name(placeholder: str) -> str:
    return placeholder[1:] if placeholder[:1] in (":", "@", "$") else placeholder


def _to_sql(value: Any) -> Any:
    if value is None or isinstance(value, (str, bytes, float)):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, Enum):
        return _to_sql(value.value)
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    return str(value)


def _to_log_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _to_log_text(value.value)
    return str(value)


class SqlQuery:
    """Runs one statement against a sqlite3 connection and walks its rows."""

    def __init__(self, db: sqlite3.Connection, statement: str) -> None:
        self._db = db
        self._statement = statement
        self._params: dict[str, Any] = {}
        self._logged_values: dict[str, Any] = {}
        self._cursor: sqlite3.Cursor | None = None
        self._row: tuple[Any, ...] | None = None
        self._last_query = ""
        self._last_insert_id: int | None = None

    @property
    def statement(self) -> str:
        return self._statement

    @property
    def last_query(self) -> str:
        """The last executed statement with bound values written in."""
        return self._last_query

    @property
    def last_insert_id(self) -> int | None:
        return self._last_insert_id

    def bind_value(self, placeholder: str, value: Any) -> None:
        self._logged_values[placeholder] = value
        self._params[_param_name(placeholder)] = _to_sql(value)

    def bind_numeric_value(self, placeholder: str, value: Any) -> None:
        """Bind a number, replacing anything not above zero with -1."""
        if not isinstance(value, numbers.Real):
            raise TypeError(f"numeric value expected, got {type(value).__name__}")
        self.bind_value(placeholder, value if value > 0 else -1)

    def bind_string_value(self, placeholder: str, value: str | None) -> None:
        self.bind_value(placeholder, "" if value is None else value)

    def bind_bool_value(self, placeholder: str, value: bool) -> None:
        self.bind_value(placeholder, 1 if value else 0)

    def exec(self) -> None:
        """Execute the statement; sqlite3.Error propagates on failure."""
        self._row = None
        self._cursor = None
        try:
            cursor = self._db.execute(self._statement, self._params)
        finally:
            executed = self._statement
            for key in sorted(self._logged_values):
                executed = executed.replace(key, _to_log_text(self._logged_values[key]))
            self._last_query = executed
            self._logged_values.clear()
        self._cursor = cursor
        self._last_insert_id = cursor.lastrowid

    def next(self) -> bool:
        """Advance to the next result row; False when there is none."""
        if self._cursor is None:
            self._row = None
            return False
        self._row = self._cursor.fetchone()
        return self._row is not None

    def value(self, index: int) -> Any:
        if self._row is None:
            raise RuntimeError("query is not positioned on a row")
        return self._row[index]

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        while self.next():
            assert self._row is not None
            yield self._row