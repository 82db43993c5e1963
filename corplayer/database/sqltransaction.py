"""Explicit transactions that roll back unless committed."""

from __future__ import annotations

import logging
import sqlite3
from types import TracebackType

logger = logging.getLogger(__name__)


class TransactionError(RuntimeError):
    """Raised when a finished transaction is committed or rolled back again."""


class SqlTransaction:
    """Begins a transaction on creation; leaving the ``with`` block uncommitted rolls it back."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db
        self._committed = False
        self._finished = False
        db.execute("BEGIN")

    @property
    def committed(self) -> bool:
        return self._committed

    def commit(self) -> None:
        if self._committed:
            raise TransactionError("transaction already committed")
        if self._finished:
            raise TransactionError("transaction already rolled back")
        self._db.execute("COMMIT")
        self._committed = True
        self._finished = True

    def rollback(self) -> None:
        if self._finished:
            raise TransactionError("transaction already finished")
        self._db.execute("ROLLBACK")
        self._finished = True

    def __enter__(self) -> SqlTransaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._finished:
            return
        logger.warning("Rolling back transaction")
        try:
            self.rollback()
        except sqlite3.Error:
            logger.warning("Failed to rollback transaction")