"""Process-wide owner of the database connection pool."""

from __future__ import annotations

import logging
import os

from corplayer.database.dbconnection import DbConnection, DbConnectionPool
from corplayer.database.dbschema import DbSchema, DbStatus

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Single shared manager; obtain it with ``DatabaseManager.instance()``."""

    _instance: DatabaseManager | None = None

    def __init__(self) -> None:
        self._connection_pool: DbConnectionPool | None = None

    @classmethod
    def instance(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def db_connection_pool(self) -> DbConnectionPool | None:
        return self._connection_pool

    def initialize(self, database_path: str | os.PathLike[str]) -> DbStatus:
        """Create a pool for ``database_path`` and make sure its schema exists."""
        self._connection_pool = DbConnectionPool.create(database_path)

        with DbConnection(self._connection_pool) as connection:
            status = DbSchema(connection).status

        if status is not DbStatus.OK:
            logger.warning("Failed to initialize database schema")
        return status