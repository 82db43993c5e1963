"""Coordinates the active track with the media player and the playlist model."""

from __future__ import annotations

import datetime as _dt
from enum import IntEnum
from typing import Any, Iterable, Mapping
from urllib.parse import unquote, urlsplit

from corplayer.itemmodel import ItemModel, ModelIndex
from corplayer.playerutils import SkipReason
from corplayer.signals import EventQueue, Signal
from corplayer.trackmetadata import Roles, TrackMetadata


class MediaStatus(IntEnum):
    """Loading state of the media in the player."""

    NO_MEDIA = 0
    LOADING_MEDIA = 1
    LOADED_MEDIA = 2
    STALLED_MEDIA = 3
    BUFFERING_MEDIA = 4
    BUFFERED_MEDIA = 5
    END_OF_MEDIA = 6
    INVALID_MEDIA = 7


class PlaybackState(IntEnum):
    """Transport state of the player."""

    STOPPED = 0
    PLAYING = 1
    PAUSED = 2


class MediaError(IntEnum):
    """Errors the player can report for the current source."""

    NO_ERROR = 0
    RESOURCE_ERROR = 1
    FORMAT_ERROR = 2
    NETWORK_ERROR = 3
    ACCESS_DENIED_ERROR = 4


class PlayingState(IntEnum):
    """Value stored in a playlist row's is-playing role."""

    NOT_PLAYING = 0
    IS_PLAYING = 1
    IS_PAUSED = 2


def _url(value: Any) -> str:
    return "" if value is None else str(value)


def _is_local_file(url: str) -> bool:
    return urlsplit(url).scheme == "file"


def _to_local_file(url: str) -> str:
    return unquote(urlsplit(url).path)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class ActiveTrackManager:
    """Drives playback of the current track and keeps the playlist model informed.

    Deferred actions (play, pause, stop, skip) are posted to ``event_queue``
    and take effect when its events are processed.
    """

    def __init__(self, event_queue: EventQueue | None = None) -> None:
        self.event_queue = event_queue if event_queue is not None else EventQueue()

        self._track_metadata = TrackMetadata()
        self._track_metadata.set_roles(Roles.for_track_fields())

        self._current_track = ModelIndex()
        self._previous_track = ModelIndex()
        self._playlist_model: ItemModel | None = None

        self._previous_track_source = ""
        self._media_status = MediaStatus.NO_MEDIA
        self._playback_state = PlaybackState.STOPPED
        self._track_error = MediaError.NO_ERROR

        self._is_playing = False
        self._skipping_current_track = False

        self._duration = 0
        self._position = 0
        self._seekable = False

        self._persistent_state: dict[str, Any] = {}
        self._undo_playing_state = False
        self._undo_track_position = 0

        self.current_track_changed = Signal()
        self.playlist_model_changed = Signal()
        self.track_source_changed = Signal()
        self.media_status_changed = Signal()
        self.playback_state_changed = Signal()
        self.track_error_changed = Signal()
        self.duration_changed = Signal()
        self.position_changed = Signal()
        self.seekable_changed = Signal()
        self.track_control_position_changed = Signal()
        self.persistent_state_changed = Signal()

        self.play_track = Signal()
        self.pause_track = Signal()
        self.stop_track = Signal()
        self.skip_next_track = Signal()

        self.seek = Signal()
        self.save_undo_position_in_wrapper = Signal()
        self.restore_undo_position_in_wrapper = Signal()
        self.source_in_error = Signal()
        self.display_track_error = Signal()
        self.track_started_playing = Signal()
        self.track_finished_playing = Signal()
        self.update_data = Signal()

    # ----------------------------------------------------------------- state

    @property
    def _roles(self) -> Roles:
        return self._track_metadata.roles

    @property
    def track_metadata(self) -> TrackMetadata:
        return self._track_metadata

    @property
    def current_track(self) -> ModelIndex:
        return self._current_track

    @property
    def playlist_model(self) -> ItemModel | None:
        return self._playlist_model

    @property
    def track_source(self) -> str:
        if not self._current_track.is_valid:
            return ""
        return _url(self._current_track.data(self._roles.file_url))

    @property
    def media_status(self) -> MediaStatus:
        return self._media_status

    @property
    def playback_state(self) -> PlaybackState:
        return self._playback_state

    @property
    def track_error(self) -> MediaError:
        return self._track_error

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def position(self) -> int:
        return self._position

    @property
    def seekable(self) -> bool:
        return self._seekable

    @property
    def track_control_position(self) -> int:
        return self._position

    @property
    def persistent_state(self) -> dict[str, Any]:
        state: dict[str, Any] = {
            "playingState": self._is_playing,
            "activePosition": self._position,
            "activeDduration": self._duration,
        }
        if self._current_track.is_valid:
            data = self._current_track.data
            state["activeTrackTitle"] = data(self._roles.title)
            state["activeTrackArtist"] = data(self._roles.artist)
            state["activeTrackAlbum"] = data(self._roles.album)
        else:
            state["activeTrackTitle"] = None
            state["activeTrackArtist"] = None
            state["activeTrackAlbum"] = None
        return state

    # ----------------------------------------------------------------- slots

    def _enqueue_emit(self, signal: Signal, *args: Any) -> None:
        self.event_queue.post(lambda: signal.emit(*args))

    def _set_model_playing_state(self, index: ModelIndex, state: PlayingState) -> None:
        if self._playlist_model is not None and index.is_valid:
            self._playlist_model.set_data(index, state, self._roles.is_playing)

    def set_current_track(self, track: ModelIndex) -> None:
        self._previous_track = self._current_track
        self._current_track = track

        if self._current_track.is_valid:
            self._restore_previous_state()

        self._track_error = MediaError.NO_ERROR

        if self._previous_track != self._current_track or self._is_playing:
            self.current_track_changed.emit()

        if self._playback_state == PlaybackState.STOPPED:
            self.track_source_changed.emit(_url(self._current_track.data(self._roles.file_url)))
        else:
            self._enqueue_emit(self.stop_track)
            if self._is_playing and not self._current_track.is_valid:
                self._is_playing = False
            self._skipping_current_track = True

    def save_for_undo_clear_playlist(self) -> None:
        self._undo_playing_state = self._is_playing
        self._undo_track_position = self._position
        self.save_undo_position_in_wrapper.emit(self._undo_track_position)

    def restore_for_undo_clear_playlist(self) -> None:
        self._position = self._undo_track_position
        self.seek.emit(self._position)

        self._is_playing = self._undo_playing_state
        self.restore_undo_position_in_wrapper.emit()

    def set_playlist_model(self, model: ItemModel | None) -> None:
        if self._playlist_model is model:
            return
        if self._playlist_model is not None:
            self._playlist_model.data_changed.disconnect(self.tracks_data_changed)
        self._playlist_model = model
        if model is not None:
            model.data_changed.connect(self.tracks_data_changed)
        self.playlist_model_changed.emit()

    def set_media_status(self, status: MediaStatus) -> None:
        if self._media_status == status:
            return
        self._media_status = MediaStatus(status)
        self.media_status_changed.emit()

        if self._media_status == MediaStatus.LOADED_MEDIA:
            if self._is_playing:
                self._enqueue_emit(self.play_track)
        elif self._media_status == MediaStatus.INVALID_MEDIA:
            self._enqueue_emit(self.skip_next_track, SkipReason.AUTOMATIC)

    def set_playback_state(self, state: PlaybackState) -> None:
        if self._playback_state == state:
            return
        self._playback_state = PlaybackState(state)
        self.playback_state_changed.emit()

        roles = self._roles
        current = self._current_track

        if self._playback_state == PlaybackState.STOPPED:
            if not self._skipping_current_track:
                if self._media_status == MediaStatus.END_OF_MEDIA:
                    self.track_finished_playing.emit(
                        _url(current.data(roles.file_url)), _dt.datetime.now()
                    )
                if self._media_status in (MediaStatus.END_OF_MEDIA, MediaStatus.INVALID_MEDIA):
                    self._enqueue_emit(self.skip_next_track, SkipReason.AUTOMATIC)
                self._set_model_playing_state(current, PlayingState.NOT_PLAYING)
            else:
                self._notify_track_source_property()
                self._skipping_current_track = False
                self._set_model_playing_state(self._previous_track, PlayingState.NOT_PLAYING)
        elif self._playback_state == PlaybackState.PLAYING:
            if self._playlist_model is not None and current.is_valid:
                self._playlist_model.set_data(current, PlayingState.IS_PLAYING, roles.is_playing)
                self.track_started_playing.emit(
                    _url(current.data(roles.file_url)), _dt.datetime.now()
                )
        else:
            self._set_model_playing_state(current, PlayingState.IS_PAUSED)

    def set_track_error(self, error: MediaError) -> None:
        if self._track_error == error:
            return
        self._track_error = MediaError(error)
        self.track_error_changed.emit()

        if self._track_error != MediaError.NO_ERROR:
            source = self.track_source
            self.source_in_error.emit(source, self._track_error)
            if _is_local_file(source):
                self.display_track_error.emit(_to_local_file(source))
            else:
                self.display_track_error.emit(source)

    def ensure_pause(self) -> None:
        if self._is_playing:
            self._is_playing = False
            self._enqueue_emit(self.pause_track)

    def ensure_play(self) -> None:
        if not self._is_playing:
            self._is_playing = True
            self._enqueue_emit(self.play_track)

    def request_play(self) -> None:
        self._is_playing = True

    def stop(self) -> None:
        self._is_playing = False
        self._enqueue_emit(self.stop_track)

    def play_pause(self) -> None:
        self._is_playing = not self._is_playing

        if self._media_status in (
            MediaStatus.LOADED_MEDIA,
            MediaStatus.BUFFERING_MEDIA,
            MediaStatus.BUFFERED_MEDIA,
            MediaStatus.LOADING_MEDIA,
        ):
            self._enqueue_emit(self.play_track if self._is_playing else self.pause_track)
        elif self._media_status == MediaStatus.END_OF_MEDIA:
            if self._playback_state == PlaybackState.PLAYING and not self._is_playing:
                self._enqueue_emit(self.pause_track)
            elif self._playback_state == PlaybackState.PAUSED and self._is_playing:
                self._enqueue_emit(self.play_track)

    def set_duration(self, duration: int) -> None:
        if self._duration == duration:
            return
        self._duration = duration
        self.duration_changed.emit()

    def set_seekable(self, seekable: bool) -> None:
        if self._seekable == seekable:
            return
        self._seekable = seekable
        self.seekable_changed.emit()

    def set_position(self, position: int) -> None:
        if self._position == position:
            return
        self._position = position
        self.position_changed.emit()
        self._enqueue_emit(self.track_control_position_changed)

    def set_track_control_position(self, position: int) -> None:
        self.seek.emit(position)

    def set_persistent_state(self, state: Mapping[str, Any]) -> None:
        if self._persistent_state == state:
            return
        self._persistent_state = dict(state)
        self.persistent_state_changed.emit()
        if self._current_track.is_valid:
            self._restore_previous_state()

    def track_seek(self, position: int) -> None:
        self.seek.emit(position)

    def playlist_finished(self) -> None:
        self._is_playing = False

    def tracks_data_changed(
        self,
        top_left: ModelIndex,
        bottom_right: ModelIndex,
        roles: Iterable[int] | None,
    ) -> None:
        current = self._current_track
        if not current.is_valid:
            return
        if current.row > bottom_right.row or current.row < top_left.row:
            return
        if current.column > bottom_right.column or current.column < top_left.column:
            return

        roles = list(roles or [])
        if not roles:
            self._notify_track_source_property()
            self._restore_previous_state()
            return
        for role in roles:
            if role == self._roles.file_url:
                self._notify_track_source_property()
                self._restore_previous_state()

    # -------------------------------------------------------------- internals

    def _notify_track_source_property(self) -> None:
        url = _url(self._current_track.data(self._roles.file_url))
        if self._skipping_current_track or self._previous_track_source != url:
            self.track_source_changed.emit(url)
            self._previous_track_source = url

    def _restore_previous_state(self) -> None:
        state = self._persistent_state
        if not state:
            return
        keys = ("activeTrackTitle", "activeTrackArtist", "activeTrackAlbum")
        if any(key not in state for key in keys):
            return
        title, artist, album = (state[key] for key in keys)

        roles = self._roles
        data = self._current_track.data
        if (
            title != data(roles.title)
            or (artist is not None and artist != data(roles.artist))
            or (album is not None and album != data(roles.album))
        ):
            if (
                self._current_track.is_valid
                and data(roles.title) is not None
                and data(roles.artist) is not None
                and data(roles.album) is not None
            ):
                self._persistent_state = {}
            return

        if not _url(data(roles.file_url)):
            return

        if "trackPosition" in state:
            self.set_duration(_to_int(state["trackPosition"]))
            self.seek.emit(self._position)
        if "trackDuration" in state:
            self.set_duration(_to_int(state["trackDuration"]))

        self._persistent_state = {}