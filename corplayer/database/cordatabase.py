"""A named SQLite database connection."""

from __future__ import annotations

import os
import sqlite3
from types import TracebackType
from urllib.parse import quote

MEMORY_DATABASE_URI = "file:memdb1?mode=memory"


class CorDatabase:
    """Opens a SQLite database file, or a memory database when no file is given."""

    def __init__(self, database_file_name: str | os.PathLike[str], connection_name: str) -> None:
        self._file_name = os.fspath(database_file_name)
        self._name = connection_name
        if self._file_name:
            self._uri = "file:" + quote(self._file_name, safe="/:")
        else:
            self._uri = MEMORY_DATABASE_URI
        self._connection: sqlite3.Connection | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def database_file_name(self) -> str:
        return self._file_name

    @property
    def uri(self) -> str:
        return self._uri

    def clone(self, connection_name: str) -> CorDatabase:
        """A new, unopened connection to the same database under another name."""
        return CorDatabase(self._file_name, connection_name)

    def open(self) -> None:
        """Open the connection if it is not open; sqlite3.Error propagates."""
        if self._connection is None:
            self._connection = sqlite3.connect(self._uri, uri=True, isolation_level=None)

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def is_open(self) -> bool:
        return self._connection is not None

    def db(self) -> sqlite3.Connection:
        """The underlying connection, opened on demand."""
        self.open()
        assert self._connection is not None
        return self._connection

    def __enter__(self) -> CorDatabase:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()