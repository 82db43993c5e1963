"""Common base for the table-specific database classes."""

from __future__ import annotations

import logging
import sqlite3

from corplayer.database.dbconnection import DbConnection
from corplayer.database.sqlquery import SqlQuery

logger = logging.getLogger(__name__)


class BaseDatabase:
    """Holds a DbConnection and offers housekeeping on its database."""

    def __init__(self) -> None:
        self._connection = DbConnection()

    def initialize(self, connection: DbConnection) -> None:
        self._connection = connection

    def db(self) -> sqlite3.Connection:
        """The calling thread's connection; RuntimeError if none is assigned."""
        return self._connection.db()

    def maintenance(self) -> None:
        """Vacuum and analyze the database, logging any step that fails."""
        try:
            SqlQuery(self.db(), "VACUUM;").exec()
        except sqlite3.Error:
            logger.warning("Failed to vacuum database")

        try:
            SqlQuery(self.db(), "ANALYZE;").exec()
        except sqlite3.Error:
            logger.warning("Failed to analyze database")