"""Enumerations and helpers shared across the player."""

from __future__ import annotations

import hashlib
from enum import IntEnum


class PlaylistEnqueueMode(IntEnum):
    """Where new entries go when they are added to the playlist."""

    APPEND_PLAYLIST = 0
    REPLACE_PLAYLIST = 1
    AFTER_CURRENT_TRACK = 2


class PlaylistEnqueueTriggerPlay(IntEnum):
    """Whether enqueuing entries starts playback."""

    DO_NOT_TRIGGER_PLAY = 0
    TRIGGER_PLAY = 1


class SkipReason(IntEnum):
    """Why the player moved on to another track."""

    AUTOMATIC = 0  # the track ended, failed to load, ...
    MANUAL = 1  # the user asked for it


class PlaylistEntryType(IntEnum):
    """The kind of element a playlist entry refers to."""

    ALBUM = 0
    ARTIST = 1
    GENRE = 2
    LYRICIST = 3
    COMPOSER = 4
    TRACK = 5
    FILE_NAME = 6
    CONTAINER = 7
    PLAYLIST = 8
    UNKNOWN = 9


class FilterType(IntEnum):
    """How a collection view is filtered."""

    UNKNOWN_FILTER = 0
    NO_FILTER = 1
    FILTER_BY_ID = 2
    FILTER_BY_GENRE = 3
    FILTER_BY_ARTIST = 4
    FILTER_BY_GENRE_AND_ARTIST = 5
    FILTER_BY_RECENTLY_PLAYED = 6
    FILTER_BY_FREQUENTLY_PLAYED = 7
    FILTER_BY_PATH = 8


_PLAYLIST_MIME_TYPES = frozenset(
    {
        "audio/x-ms-wax",
        "audio/x-scpls",
        "audio/x-mpegurl",
        "audio/mpegurl",
        "application/mpegurl",
        "application/x-mpegurl",
        "application/vnd.apple.mpegurl",
        "application/vnd.apple.mpegurl.audio",
        "audio/vnd.rn-realaudio",
        "audio/x-pn-realaudio",
    }
)


def is_playlist(mime_type: str) -> bool:
    """Return True if ``mime_type`` names a playlist format."""
    essence = mime_type.split(";", 1)[0].strip().lower()
    return essence in _PLAYLIST_MIME_TYPES


def calculate_track_hash(*args: str | None) -> str:
    """Return the hex MD5 digest of the UTF-8 encoded columns, fed in order."""
    digest = hashlib.md5()
    for column in args:
        if column is None:
            continue
        if not isinstance(column, str):
            raise TypeError(f"track hash columns must be strings, got {type(column).__name__}")
        digest.update(column.encode("utf-8"))
    return digest.hexdigest()