"""Tracks what the player transport controls may do."""

from __future__ import annotations

from corplayer.itemmodel import ModelIndex
from corplayer.signals import Signal


class PlayerManager:
    """Derives play/skip availability from the previous, current and next tracks."""

    def __init__(self) -> None:
        self._previous_track = ModelIndex()
        self._current_track = ModelIndex()
        self._next_track = ModelIndex()
        self._is_playing = False

        self.is_playing_changed = Signal()
        self.can_play_changed = Signal()
        self.can_skip_backward_changed = Signal()
        self.can_skip_forward_changed = Signal()
        self.current_track_changed = Signal()
        self.previous_track_changed = Signal()
        self.next_track_changed = Signal()

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def can_play(self) -> bool:
        return self._current_track.is_valid

    @property
    def can_skip_backward(self) -> bool:
        return self._previous_track.is_valid

    @property
    def can_skip_forward(self) -> bool:
        return self._next_track.is_valid

    @property
    def current_track(self) -> ModelIndex:
        return self._current_track

    @property
    def previous_track(self) -> ModelIndex:
        return self._previous_track

    @property
    def next_track(self) -> ModelIndex:
        return self._next_track

    def _set_playing_state(self, playing: bool) -> None:
        if self._is_playing == playing:
            return
        old_backward = self.can_skip_backward
        old_forward = self.can_skip_forward

        self._is_playing = playing
        self.is_playing_changed.emit()

        if not self._current_track.is_valid:
            return
        if old_forward != self.can_skip_forward:
            self.can_skip_forward_changed.emit()
        if old_backward != self.can_skip_backward:
            self.can_skip_backward_changed.emit()

    def playing(self) -> None:
        self._set_playing_state(True)

    def paused_or_stopped(self) -> None:
        self._set_playing_state(False)

    def set_previous_track(self, track: ModelIndex) -> None:
        if self._previous_track == track:
            return
        old = self.can_skip_backward
        self._previous_track = track
        self.previous_track_changed.emit()
        if old != self.can_skip_backward:
            self.can_skip_backward_changed.emit()

    def set_current_track(self, track: ModelIndex) -> None:
        if self._current_track == track:
            return
        old = self.can_play
        self._current_track = track
        self.current_track_changed.emit()
        if old != self.can_play:
            self.can_play_changed.emit()

    def set_next_track(self, track: ModelIndex) -> None:
        if self._next_track == track:
            return
        old = self.can_skip_forward
        self._next_track = track
        self.next_track_changed.emit()
        if old != self.can_skip_forward:
            self.can_skip_forward_changed.emit()