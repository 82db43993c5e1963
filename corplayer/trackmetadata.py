"""Live view of the metadata of the track that is currently active."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from corplayer.itemmodel import ModelIndex
from corplayer.metadata import Fields, PlaylistFields
from corplayer.playerutils import PlaylistEntryType
from corplayer.signals import Signal

DISPLAY_ROLE = 0


@dataclass
class Roles:
    """Which item-model role each piece of track metadata is read from."""

    title: int = DISPLAY_ROLE
    artist: int = DISPLAY_ROLE
    album: int = DISPLAY_ROLE
    album_artist: int = DISPLAY_ROLE
    file_url: int = DISPLAY_ROLE
    cover_url: int = DISPLAY_ROLE
    database_id: int = DISPLAY_ROLE
    element_type: int = DISPLAY_ROLE
    is_playing: int = DISPLAY_ROLE
    album_id: int = DISPLAY_ROLE
    is_valid: int = DISPLAY_ROLE

    @classmethod
    def for_track_fields(cls) -> Roles:
        """Roles matching the metadata fields used by playlist models."""
        return cls(
            title=Fields.TITLE,
            artist=Fields.ARTIST,
            album=Fields.ALBUM,
            album_artist=Fields.ALBUM_ARTIST,
            file_url=Fields.RESOURCE_URL,
            cover_url=Fields.COVER_IMAGE,
            database_id=Fields.DATABASE_ID,
            element_type=Fields.ELEMENT_TYPE,
            is_playing=PlaylistFields.IS_PLAYING,
            album_id=Fields.ALBUM_ID,
            is_valid=Fields.IS_VALID,
        )


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_unsigned(value: Any) -> int | None:
    """Convert to a non-negative integer, or None when that is not possible."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return int(value) if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value >= 0 else None
    if isinstance(value, (str, bytes)):
        try:
            number = int(value.strip())
        except ValueError:
            return None
        return number if number >= 0 else None
    return None


def _to_entry_type(value: Any) -> PlaylistEntryType:
    if value is None:
        return PlaylistEntryType.UNKNOWN
    try:
        return PlaylistEntryType(int(value))
    except (TypeError, ValueError):
        return PlaylistEntryType.UNKNOWN


@dataclass
class _Snapshot:
    title: str = ""
    artist: str = ""
    album: str = ""
    album_artist: str = ""
    file_url: str = ""
    cover_url: str = ""
    database_id: int = 0
    element_type: PlaylistEntryType = PlaylistEntryType.UNKNOWN
    is_playing: bool = False
    album_id: int = 0
    is_valid: bool = False


class TrackMetadata:
    """Exposes the current track's metadata and signals when it changes."""

    def __init__(self) -> None:
        self._roles = Roles()
        self._current_track = ModelIndex()
        self._snapshot = _Snapshot()

        self.title_changed = Signal()
        self.artist_changed = Signal()
        self.album_changed = Signal()
        self.album_artist_changed = Signal()
        self.file_url_changed = Signal()
        self.cover_url_changed = Signal()
        self.database_id_changed = Signal()
        self.element_type_changed = Signal()
        self.is_playing_changed = Signal()
        self.album_id_changed = Signal()
        self.is_valid_changed = Signal()

    @property
    def roles(self) -> Roles:
        return self._roles

    @property
    def current_track(self) -> ModelIndex:
        return self._current_track

    def _read(self, role: int) -> Any:
        if not self._current_track.is_valid:
            return None
        return self._current_track.data(role)

    @property
    def title(self) -> str:
        return _to_text(self._read(self._roles.title))

    @property
    def artist(self) -> str:
        value = self._read(self._roles.artist)
        if value is None or _to_text(value) == "":
            value = self._read(self._roles.album_artist)
        return _to_text(value)

    @property
    def album(self) -> str:
        return _to_text(self._read(self._roles.album))

    @property
    def album_artist(self) -> str:
        return _to_text(self._read(self._roles.album_artist))

    @property
    def file_url(self) -> str:
        return _to_text(self._read(self._roles.file_url))

    @property
    def cover_url(self) -> str:
        return _to_text(self._read(self._roles.cover_url))

    @property
    def database_id(self) -> int:
        return _to_unsigned(self._read(self._roles.database_id)) or 0

    @property
    def element_type(self) -> PlaylistEntryType:
        return _to_entry_type(self._read(self._roles.element_type))

    @property
    def is_playing(self) -> bool:
        return bool(self._read(self._roles.is_playing))

    @property
    def album_id(self) -> int:
        return _to_unsigned(self._read(self._roles.album_id)) or 0

    @property
    def is_valid(self) -> bool:
        return self._current_track.is_valid and bool(self._read(self._roles.is_valid))

    def set_roles(self, roles: Roles) -> None:
        self._roles = roles

    def set_current_track(self, track: ModelIndex) -> None:
        if self._current_track == track:
            return
        self._current_track = track
        self.update_metadata()

    def _refresh(self, name: str, value: Any, signal: Signal) -> None:
        if getattr(self._snapshot, name) != value:
            setattr(self._snapshot, name, value)
            signal.emit()

    def update_metadata(self) -> None:
        """Re-read every field from the current track and signal the ones that changed."""
        data: Callable[[int], Any] = self._current_track.data
        roles = self._roles

        self._refresh("title", _to_text(data(roles.title)), self.title_changed)
        self._refresh("artist", _to_text(data(roles.artist)), self.artist_changed)
        self._refresh("album", _to_text(data(roles.album)), self.album_changed)
        self._refresh(
            "album_artist", _to_text(data(roles.album_artist)), self.album_artist_changed
        )
        self._refresh("file_url", _to_text(data(roles.file_url)), self.file_url_changed)
        self._refresh("cover_url", _to_text(data(roles.cover_url)), self.cover_url_changed)
        self._refresh(
            "database_id",
            _to_unsigned(data(roles.database_id)) or 0,
            self.database_id_changed,
        )
        self._refresh(
            "element_type",
            _to_entry_type(data(roles.element_type)),
            self.element_type_changed,
        )
        self._refresh("is_playing", bool(data(roles.is_playing)), self.is_playing_changed)
        self._refresh(
            "album_id", _to_unsigned(data(roles.album_id)) or 0, self.album_id_changed
        )
        self._refresh("is_valid", bool(data(roles.is_valid)), self.is_valid_changed)