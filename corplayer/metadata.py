"""Track metadata fields and containers."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from corplayer.playerutils import calculate_track_hash

USER_ROLE = 0x0100


class Fields(IntEnum):
    """Metadata fields of a track; values double as item-model roles."""

    TITLE = USER_ROLE + 1
    ARTIST = TITLE + 1
    ALBUM = TITLE + 2
    ALBUM_ARTIST = TITLE + 3
    DATABASE_ID = TITLE + 4
    RESOURCE_URL = TITLE + 5
    GENRE = TITLE + 6
    COMPOSER = TITLE + 7
    LYRICIST = TITLE + 8
    CONDUCTOR = TITLE + 9
    PERFORMER = TITLE + 10
    YEAR = TITLE + 11
    TRACK_NUMBER = TITLE + 12
    DISC_NUMBER = TITLE + 13
    DURATION = TITLE + 14
    DURATION_STRING = TITLE + 15
    BIT_RATE = TITLE + 16
    SAMPLE_RATE = TITLE + 17
    CHANNELS = TITLE + 18
    COVER_IMAGE = TITLE + 19
    HAS_EMBEDDED_COVER = TITLE + 20
    ALBUM_ID = TITLE + 21
    COMMENT = TITLE + 22
    LYRICS = TITLE + 23
    RATING = TITLE + 24
    LAST_PLAYED = TITLE + 25
    DATE_ADDED = TITLE + 26
    DATE_MODIFIED = TITLE + 27
    FILE_TYPE = TITLE + 28
    ELEMENT_TYPE = TITLE + 29
    HASH = TITLE + 30
    IS_VALID = TITLE + 31


class PlaylistFields(IntEnum):
    """Extra roles used only by playlist models."""

    IS_PLAYING = Fields.IS_VALID + 1
    ALBUM_SECTION = IS_PLAYING + 1
    METADATA_MODIFIABLE = IS_PLAYING + 2


def _value_to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _value_to_string(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, _dt.datetime):
        return value.isoformat(timespec="milliseconds")
    if isinstance(value, _dt.time):
        return value.isoformat(timespec="milliseconds")
    if isinstance(value, _dt.date):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _is_valid_time(value: Any) -> bool:
    if isinstance(value, _dt.datetime):
        return False
    if isinstance(value, _dt.time):
        return True
    if isinstance(value, _dt.timedelta):
        return _dt.timedelta(0) <= value < _dt.timedelta(days=1)
    if isinstance(value, str):
        try:
            _dt.time.fromisoformat(value)
        except ValueError:
            return False
        return True
    return False


@dataclass
class TrackFields:
    """A mapping of metadata fields to values for one track."""

    data: dict[Fields, Any] = field(default_factory=dict)

    def insert(self, field: Fields, value: Any) -> None:
        self.data[field] = value

    def is_valid(self) -> bool:
        """True when the track has data and a usable duration."""
        return not self.is_empty() and _is_valid_time(self.data.get(Fields.DURATION))

    def is_empty(self) -> bool:
        return not self.data

    def get(self, field: Fields) -> Any:
        return self.data.get(field)

    def contains(self, field: Fields) -> bool:
        return field in self.data

    def __contains__(self, field: object) -> bool:
        return field in self.data

    def generate_hash(self) -> str:
        """Hash the identifying fields of the track."""
        columns = (
            Fields.TITLE,
            Fields.ARTIST,
            Fields.ALBUM,
            Fields.ALBUM_ARTIST,
            Fields.GENRE,
            Fields.YEAR,
            Fields.DURATION,
            Fields.BIT_RATE,
            Fields.RESOURCE_URL,
            Fields.FILE_TYPE,
        )
        return calculate_track_hash(*(_value_to_string(self.data.get(column)) for column in columns))


@dataclass
class EntryFields:
    """A playlist entry: track metadata, or a bare title or URL."""

    track_fields: TrackFields = field(default_factory=TrackFields)
    title: str = ""
    url: str = ""

    def is_valid(self) -> bool:
        return not self.track_fields.is_empty() or bool(self.title) or bool(self.url)