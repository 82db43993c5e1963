"""Per-thread database connections handed out from a shared pool."""

from __future__ import annotations

import logging
import os
import random
import sqlite3
import threading
from types import TracebackType

from corplayer.database.cordatabase import CorDatabase
from corplayer.database.sqlquery import SqlQuery

logger = logging.getLogger(__name__)


class DbConnectionPool:
    """Holds at most one open connection per thread to one database."""

    def __init__(self, database_name: str | os.PathLike[str]) -> None:
        self._database_name = os.fspath(database_name)
        self._local = threading.local()

    @classmethod
    def create(cls, database_name: str | os.PathLike[str]) -> DbConnectionPool:
        return cls(database_name)

    @property
    def database_name(self) -> str:
        return self._database_name

    def _local_connection(self) -> CorDatabase | None:
        return getattr(self._local, "connection", None)

    def has_connection(self) -> bool:
        return self._local_connection() is not None

    def create_connection(self) -> bool:
        """Open this thread's connection with foreign keys on.

        Returns False if the thread already has one; sqlite3.Error propagates.
        """
        existing = self._local_connection()
        if existing is not None:
            logger.warning("Connection already exists: %s", existing.name)
            return False

        connection_name = f"Connection-{random.getrandbits(32)}"
        database = CorDatabase(self._database_name, connection_name)
        database.open()
        try:
            SqlQuery(database.db(), "PRAGMA foreign_keys = ON;").exec()
        except sqlite3.Error:
            database.close()
            raise

        self._local.connection = database
        return True

    def acquire(self) -> CorDatabase | None:
        connection = self._local_connection()
        if connection is None:
            logger.warning("DbConnectionPool.acquire: No connection available")
        return connection

    def release(self) -> None:
        """Close and drop this thread's connection."""
        connection = self._local_connection()
        if connection is None:
            logger.warning("DbConnectionPool.release: No connection available")
            return
        connection.close()
        self._local.connection = None


class DbConnection:
    """A handle to the pool's connection for the calling thread."""

    def __init__(self, pool: DbConnectionPool | None = None) -> None:
        self._pool = pool

    @property
    def pool(self) -> DbConnectionPool | None:
        return self._pool

    def is_valid(self) -> bool:
        return self._pool is not None

    def db(self) -> sqlite3.Connection:
        """This thread's open connection, created on first use."""
        if self._pool is None:
            raise RuntimeError("no connection pool assigned")
        if not self._pool.has_connection():
            self._pool.create_connection()
        database = self._pool.acquire()
        if database is None:
            raise RuntimeError("could not acquire a database connection")
        return database.db()

    def close(self) -> None:
        """Release this thread's connection back to the pool."""
        if self._pool is not None and self._pool.has_connection():
            self._pool.release()

    def __enter__(self) -> DbConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()