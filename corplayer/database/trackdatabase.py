"""Storage of scanned tracks in the `Tracks` table."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any
from urllib.parse import unquote, urlsplit

from corplayer.database.basedatabase import BaseDatabase
from corplayer.database.sqlquery import SqlQuery
from corplayer.database.sqltransaction import SqlTransaction
from corplayer.metadata import Fields, TrackFields

logger = logging.getLogger(__name__)

COVER_URL_PREFIX = "image://cover/"

_TRACK_COLUMNS = (
    "`FileName`, `Title`, `ArtistName`, `AlbumTitle`, `AlbumArtistName`, `TrackNumber`, "
    "`DiscNumber`, `Duration`, `Genre`, `Performer`, `Composer`, `Lyricist`, `Year`, `Channels`, "
    "`Bitrate`, `SampleRate`, `HasEmbeddedCover`, `TrackHash`"
)

_TRACK_COLUMN_BINDS = (
    ":fileName, :title, :artist, :album, :albumArtist, :trackNumber, :discNumber, :duration, "
    ":genre, :performer, :composer, :lyricist, :year, :channels, :bitRate, :sampleRate, "
    ":hasEmbeddedCover, :trackHash"
)

# Order of the columns after `TrackID` in a SELECT of _TRACK_COLUMNS.
_ROW_FIELDS = (
    Fields.RESOURCE_URL,
    Fields.TITLE,
    Fields.ARTIST,
    Fields.ALBUM,
    Fields.ALBUM_ARTIST,
    Fields.TRACK_NUMBER,
    Fields.DISC_NUMBER,
    Fields.DURATION,
    Fields.GENRE,
    Fields.PERFORMER,
    Fields.COMPOSER,
    Fields.LYRICIST,
    Fields.YEAR,
    Fields.CHANNELS,
    Fields.BIT_RATE,
    Fields.SAMPLE_RATE,
    Fields.HAS_EMBEDDED_COVER,
)

_BINDINGS = {
    ":fileName": Fields.RESOURCE_URL,
    ":title": Fields.TITLE,
    ":artist": Fields.ARTIST,
    ":album": Fields.ALBUM,
    ":albumArtist": Fields.ALBUM_ARTIST,
    ":trackNumber": Fields.TRACK_NUMBER,
    ":discNumber": Fields.DISC_NUMBER,
    ":duration": Fields.DURATION,
    ":genre": Fields.GENRE,
    ":performer": Fields.PERFORMER,
    ":composer": Fields.COMPOSER,
    ":lyricist": Fields.LYRICIST,
    ":year": Fields.YEAR,
    ":channels": Fields.CHANNELS,
    ":bitRate": Fields.BIT_RATE,
    ":sampleRate": Fields.SAMPLE_RATE,
    ":hasEmbeddedCover": Fields.HAS_EMBEDDED_COVER,
    ":trackHash": Fields.HASH,
}


def _local_file(url: Any) -> str:
    if url is None:
        return ""
    parts = urlsplit(str(url))
    return unquote(parts.path) if parts.scheme == "file" else ""


def _track_from_row(row: tuple[Any, ...]) -> TrackFields:
    track = TrackFields()
    track.insert(Fields.DATABASE_ID, row[0])
    for field, value in zip(_ROW_FIELDS, row[1:]):
        track.insert(field, value)
    track.insert(Fields.COVER_IMAGE, COVER_URL_PREFIX + _local_file(row[1]))
    track.insert(Fields.HASH, row[18])
    return track


def _bind_track(query: SqlQuery, track: TrackFields) -> None:
    for placeholder, field in _BINDINGS.items():
        query.bind_value(placeholder, track.get(field))


class TrackDatabase(BaseDatabase):
    """Reads and writes TrackFields records."""

    def get_tracks(self) -> list[TrackFields]:
        query = SqlQuery(self.db(), f"SELECT `TrackID`, {_TRACK_COLUMNS} FROM Tracks;")
        query.exec()
        if self._track_count() < 1:
            return []
        return [_track_from_row(row) for row in query]

    def insert_tracks(self, tracks: list[TrackFields]) -> None:
        """Insert tracks lacking a database id and give each its new id.

        A track that cannot be inserted is logged and skipped.
        """
        if not tracks:
            return
        db = self.db()
        with SqlTransaction(db) as transaction:
            for track in tracks:
                if not track.contains(Fields.DATABASE_ID):
                    self._insert_track(db, track)
            transaction.commit()

    def update_tracks(self, tracks: list[TrackFields]) -> None:
        """Write back tracks that have a database id; failures are logged."""
        if not tracks:
            return
        db = self.db()
        with SqlTransaction(db) as transaction:
            for track in tracks:
                if not track.contains(Fields.DATABASE_ID):
                    continue
                try:
                    self._update_track(db, track)
                except sqlite3.Error:
                    logger.warning("Failed to update track: %s", track.get(Fields.TITLE))
            transaction.commit()

    def delete_track(self, track_id: int) -> None:
        self._delete_track(self.db(), track_id)

    def delete_tracks(self, tracks: list[TrackFields]) -> bool:
        """Delete the given tracks; True only if every one had an id and was deleted."""
        if not tracks:
            return True
        db = self.db()
        deleted = 0
        with SqlTransaction(db) as transaction:
            for track in tracks:
                if not track.contains(Fields.DATABASE_ID):
                    continue
                try:
                    self._delete_track(db, int(track.get(Fields.DATABASE_ID)))
                except (sqlite3.Error, TypeError, ValueError):
                    logger.warning("Failed to delete track: %s", track.get(Fields.TITLE))
                    continue
                deleted += 1
            transaction.commit()
        return deleted == len(tracks)

    def fetch_track_id_from_file_name(self, file_name: Any) -> int:
        """The id of the track stored under ``file_name``, or 0 if there is none."""
        query = SqlQuery(self.db(), "SELECT `TrackID` FROM `Tracks` WHERE `FileName` = :fileName;")
        query.bind_string_value(":fileName", None if file_name is None else str(file_name))
        query.exec()
        if query.next():
            return int(query.value(0))
        return 0

    def fetch_track_from_id(self, track_id: int) -> TrackFields:
        """The stored track with ``track_id``, or empty TrackFields if there is none."""
        query = SqlQuery(
            self.db(),
            f"SELECT `TrackID`, {_TRACK_COLUMNS} FROM `Tracks` WHERE `TrackID` = :trackId;",
        )
        query.bind_numeric_value(":trackId", track_id)
        query.exec()
        if query.next():
            return _track_from_row(tuple(query.value(i) for i in range(19)))
        return TrackFields()

    def _track_count(self) -> int:
        query = SqlQuery(self.db(), "SELECT COUNT(*) FROM `Tracks`;")
        query.exec()
        if query.next():
            return int(query.value(0))
        return -1

    @staticmethod
    def _delete_track(db: sqlite3.Connection, track_id: int) -> None:
        query = SqlQuery(db, "DELETE FROM `Tracks` WHERE `TrackID` = :trackId;")
        query.bind_numeric_value(":trackId", track_id)
        query.exec()

    @staticmethod
    def _insert_track(db: sqlite3.Connection, track: TrackFields) -> bool:
        query = SqlQuery(db, f"INSERT INTO `Tracks` ({_TRACK_COLUMNS}) VALUES ({_TRACK_COLUMN_BINDS});")
        _bind_track(query, track)
        try:
            query.exec()
        except sqlite3.Error as error:
            logger.warning("Failed to insert track: %s\nLast query: %s", error, query.last_query)
            return False
        track.insert(Fields.DATABASE_ID, query.last_insert_id)
        return True

    @staticmethod
    def _update_track(db: sqlite3.Connection, track: TrackFields) -> None:
        query = SqlQuery(
            db,
            "UPDATE `Tracks` SET `Title` = :title, `ArtistName` = :artist, `AlbumTitle` = :album, "
            "`Genre` = :genre, `Duration` = :duration, `TrackNumber` = :track_number, "
            "`Year` = :year, `FileName` = :fileName WHERE `TrackID` = :trackId;",
        )
        query.bind_numeric_value(":trackId", int(track.get(Fields.DATABASE_ID)))
        _bind_track(query, track)
        query.bind_value(":track_number", track.get(Fields.TRACK_NUMBER))
        query.exec()