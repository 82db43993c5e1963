"""Creation of the tables and indexes the player stores its library in."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum

from corplayer.database.dbconnection import DbConnection
from corplayer.signals import Signal

logger = logging.getLogger(__name__)


class DbStatus(Enum):
    """Outcome of preparing the database schema."""

    OK = 0
    DATABASE_ERROR = 1
    BROKEN_SCHEMA_ERROR = 2
    CONNECTION_ERROR = 3


class SchemaStatus(Enum):
    """Outcome of bringing an existing schema up to date."""

    LATEST = 0
    SUCCESSFUL_UPGRADE = 1
    FAILED_UPGRADE = 2


def _quote(name: str) -> str:
    return f'"{name}"'


@dataclass(frozen=True)
class _Table:
    name: str
    columns: tuple[tuple[str, str], ...]
    constraints: tuple[str, ...] = ()

    def ddl(self) -> str:
        parts = [f"{_quote(column)} {kind}" for column, kind in self.columns]
        parts.extend(self.constraints)
        return f"CREATE TABLE IF NOT EXISTS {_quote(self.name)} ({', '.join(parts)})"


@dataclass(frozen=True)
class _Index:
    name: str
    table: str
    columns: tuple[str, ...]

    def ddl(self) -> str:
        cols = ", ".join(_quote(column) for column in self.columns)
        return f"CREATE INDEX IF NOT EXISTS {_quote(self.name)} ON {_quote(self.table)} ({cols})"


def _foreign_key(column: str, table: str) -> str:
    return (
        f"FOREIGN KEY ({_quote(column)}) REFERENCES {_quote(table)} ({_quote(column)}) "
        "ON DELETE CASCADE"
    )


_TEXT = "TEXT"
_INT = "INTEGER"
_AUTO_KEY = "INTEGER PRIMARY KEY AUTOINCREMENT"

_TABLES = (
    _Table(
        "Tracks",
        (
            ("TrackID", _AUTO_KEY),
            ("FileName", f"{_TEXT} NOT NULL UNIQUE"),
            ("Title", f"{_TEXT} NOT NULL"),
            ("ArtistName", _TEXT),
            ("AlbumTitle", _TEXT),
            ("AlbumArtistName", _TEXT),
            ("TrackNumber", _INT),
            ("DiscNumber", _INT),
            ("Duration", f"{_INT} NOT NULL"),
            ("Genre", _TEXT),
            ("Performer", _TEXT),
            ("Composer", _TEXT),
            ("Lyricist", _TEXT),
            ("Year", _INT),
            ("Channels", _INT),
            ("Bitrate", _INT),
            ("SampleRate", _INT),
            ("HasEmbeddedCover", _INT),
            ("TrackHash", f"{_TEXT} UNIQUE"),
        ),
    ),
    _Table(
        "Playlists",
        (
            ("PlaylistID", _AUTO_KEY),
            ("PlaylistName", f"{_TEXT} NOT NULL UNIQUE"),
        ),
    ),
    _Table(
        "PlaylistTracks",
        (
            ("PlaylistID", f"{_INT} NOT NULL"),
            ("TrackID", f"{_INT} NOT NULL"),
            ("TrackIndex", f"{_INT} NOT NULL"),
        ),
        (
            _foreign_key("PlaylistID", "Playlists"),
            _foreign_key("TrackID", "Tracks"),
            f"PRIMARY KEY ({_quote('PlaylistID')}, {_quote('TrackID')})",
        ),
    ),
)

_INDEXES = (
    _Index("TrackIndex", "Tracks", ("TrackHash",)),
    _Index("PlaylistIndex", "Playlists", ("PlaylistID", "PlaylistName")),
    _Index("PlaylistTrackIndex", "PlaylistTracks", ("PlaylistID", "TrackIndex")),
)


def _foreign_keys_step(enabled: bool) -> tuple[str, str]:
    state = "ON" if enabled else "OFF"
    verb = "enable" if enabled else "disable"
    return f"PRAGMA foreign_keys = {state}", f"Failed to {verb} foreign keys."


def _schema_steps() -> list[tuple[str, str]]:
    """Statements to run, in order, each paired with the message logged on failure."""
    steps = [_foreign_keys_step(False)]
    steps.extend((table.ddl(), f'Failed to create table "{table.name}".') for table in _TABLES)
    steps.append(_foreign_keys_step(True))
    steps.extend((index.ddl(), f'Failed to create index "{index.name}".') for index in _INDEXES)
    return steps


class DbSchema:
    """Creates the schema on construction and records how that went in ``status``."""

    def __init__(self, connection: DbConnection) -> None:
        self._status = DbStatus.OK
        self.status_changed = Signal()

        if not connection.is_valid():
            self._set_status(DbStatus.CONNECTION_ERROR)
            return

        try:
            db = connection.db()
        except sqlite3.Error:
            logger.warning("Failed to open database connection for the schema")
            self._set_status(DbStatus.BROKEN_SCHEMA_ERROR)
            return

        if not self._create_schema(db):
            self._set_status(DbStatus.BROKEN_SCHEMA_ERROR)

    @property
    def status(self) -> DbStatus:
        return self._status

    def _set_status(self, status: DbStatus) -> None:
        if self._status == status:
            return
        self._status = status
        self.status_changed.emit(status)

    def _create_schema(self, db: sqlite3.Connection) -> bool:
        for statement, failure in _schema_steps():
            try:
                db.execute(statement)
            except sqlite3.Error:
                logger.warning(failure)
                self._set_status(DbStatus.DATABASE_ERROR)
        return self._status == DbStatus.OK