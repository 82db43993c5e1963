import pytest

from corplayer.activetrackmanager import (
    ActiveTrackManager,
    MediaError,
    MediaStatus,
    PlaybackState,
    PlayingState,
)
from corplayer.itemmodel import ItemModel
from corplayer.metadata import Fields, PlaylistFields
from corplayer.playerutils import SkipReason

URL_A = "file:///music/a.flac"
URL_B = "file:///music/b.flac"


def _record(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


def _row(title, url, artist="Artist", album="Album"):
    return {
        Fields.TITLE: title,
        Fields.ARTIST: artist,
        Fields.ALBUM: album,
        Fields.RESOURCE_URL: url,
    }


@pytest.fixture
def model():
    m = ItemModel()
    m.append_row(_row("Song A", URL_A))
    m.append_row(_row("Song B", URL_B))
    return m


@pytest.fixture
def manager(model):
    mgr = ActiveTrackManager()
    mgr.set_playlist_model(model)
    return mgr


def test_metadata_roles_follow_track_fields(manager):
    assert manager.track_metadata.roles.file_url == Fields.RESOURCE_URL
    assert manager.track_metadata.roles.is_playing == PlaylistFields.IS_PLAYING


def test_set_current_track_while_stopped_emits_source(manager, model):
    sources = _record(manager.track_source_changed)
    changed = _record(manager.current_track_changed)
    manager.set_current_track(model.index(0))
    assert sources == [(URL_A,)]
    assert len(changed) == 1
    assert manager.track_source == URL_A


def test_same_track_twice_not_playing_changes_once(manager, model):
    changed = _record(manager.current_track_changed)
    manager.set_current_track(model.index(0))
    manager.set_current_track(model.index(0))
    assert len(changed) == 1


def test_ensure_play_is_deferred_and_idempotent(manager):
    plays = _record(manager.play_track)
    manager.ensure_play()
    manager.ensure_play()
    assert plays == []
    manager.event_queue.process_events()
    assert len(plays) == 1


def test_ensure_pause_only_when_playing(manager):
    pauses = _record(manager.pause_track)
    manager.ensure_pause()
    manager.event_queue.process_events()
    assert pauses == []
    manager.ensure_play()
    manager.ensure_pause()
    manager.event_queue.process_events()
    assert len(pauses) == 1


def test_loaded_media_plays_when_requested(manager):
    plays = _record(manager.play_track)
    manager.request_play()
    manager.set_media_status(MediaStatus.LOADED_MEDIA)
    manager.event_queue.process_events()
    assert len(plays) == 1
    assert manager.media_status == MediaStatus.LOADED_MEDIA


def test_invalid_media_skips_automatically(manager):
    skips = _record(manager.skip_next_track)
    manager.set_media_status(MediaStatus.INVALID_MEDIA)
    manager.event_queue.process_events()
    assert skips == [(SkipReason.AUTOMATIC,)]


def test_playing_marks_model_and_reports_start(manager, model):
    started = _record(manager.track_started_playing)
    manager.set_current_track(model.index(0))
    manager.set_playback_state(PlaybackState.PLAYING)
    assert model.data(model.index(0), PlaylistFields.IS_PLAYING) == PlayingState.IS_PLAYING
    assert [call[0] for call in started] == [URL_A]


def test_paused_marks_model(manager, model):
    manager.set_current_track(model.index(0))
    manager.set_playback_state(PlaybackState.PAUSED)
    assert model.data(model.index(0), PlaylistFields.IS_PLAYING) == PlayingState.IS_PAUSED


def test_end_of_media_finishes_and_skips(manager, model):
    finished = _record(manager.track_finished_playing)
    skips = _record(manager.skip_next_track)
    manager.set_current_track(model.index(0))
    manager.set_playback_state(PlaybackState.PLAYING)
    manager.set_media_status(MediaStatus.END_OF_MEDIA)
    manager.set_playback_state(PlaybackState.STOPPED)
    manager.event_queue.process_events()
    assert [call[0] for call in finished] == [URL_A]
    assert skips == [(SkipReason.AUTOMATIC,)]
    assert model.data(model.index(0), PlaylistFields.IS_PLAYING) == PlayingState.NOT_PLAYING


def test_switching_track_while_playing_stops_then_changes_source(manager, model):
    stops = _record(manager.stop_track)
    manager.set_current_track(model.index(0))
    manager.set_playback_state(PlaybackState.PLAYING)
    sources = _record(manager.track_source_changed)

    manager.set_current_track(model.index(1))
    assert sources == []
    manager.event_queue.process_events()
    assert len(stops) == 1

    manager.set_playback_state(PlaybackState.STOPPED)
    assert sources == [(URL_B,)]
    assert model.data(model.index(0), PlaylistFields.IS_PLAYING) == PlayingState.NOT_PLAYING


def test_local_file_error_displays_path(manager, model):
    errors = _record(manager.source_in_error)
    shown = _record(manager.display_track_error)
    manager.set_current_track(model.index(0))
    manager.set_track_error(MediaError.RESOURCE_ERROR)
    assert errors == [(URL_A, MediaError.RESOURCE_ERROR)]
    assert shown == [("/music/a.flac",)]


def test_remote_error_displays_url():
    remote = ItemModel()
    remote.append_row(_row("Stream", "https://radio.example.com/live"))
    mgr = ActiveTrackManager()
    shown = _record(mgr.display_track_error)
    mgr.set_current_track(remote.index(0))
    mgr.set_track_error(MediaError.NETWORK_ERROR)
    assert shown == [("https://radio.example.com/live",)]
    assert mgr.track_error == MediaError.NETWORK_ERROR


def test_set_position_emits_control_position_later(manager):
    positions = _record(manager.position_changed)
    control = _record(manager.track_control_position_changed)
    manager.set_position(42)
    manager.set_position(42)
    assert len(positions) == 1
    assert control == []
    manager.event_queue.process_events()
    assert len(control) == 1
    assert manager.track_control_position == 42


def test_undo_clear_playlist_restores_position(manager):
    saved = _record(manager.save_undo_position_in_wrapper)
    seeks = _record(manager.seek)
    restored = _record(manager.restore_undo_position_in_wrapper)
    manager.set_position(42)
    manager.save_for_undo_clear_playlist()
    manager.set_position(7)
    manager.restore_for_undo_clear_playlist()
    assert saved == [(42,)]
    assert seeks == [(42,)]
    assert len(restored) == 1
    assert manager.position == 42


def test_track_seek_and_control_position_emit_seek(manager):
    seeks = _record(manager.seek)
    manager.track_seek(10)
    manager.set_track_control_position(20)
    assert seeks == [(10,), (20,)]


def test_persistent_state_reports_current_track(manager, model):
    manager.set_current_track(model.index(0))
    manager.set_duration(300)
    state = manager.persistent_state
    assert state["activeTrackTitle"] == "Song A"
    assert state["activeTrackArtist"] == "Artist"
    assert state["activeTrackAlbum"] == "Album"
    assert state["activeDduration"] == 300
    assert state["playingState"] is False


def test_persistent_state_without_track_is_empty(manager):
    state = manager.persistent_state
    assert state["activeTrackTitle"] is None
    assert state["activeTrackAlbum"] is None


def test_restore_duration_for_matching_track(manager, model):
    manager.set_current_track(model.index(0))
    manager.set_persistent_state(
        {
            "activeTrackTitle": "Song A",
            "activeTrackArtist": "Artist",
            "activeTrackAlbum": "Album",
            "trackDuration": 1234,
        }
    )
    assert manager.duration == 1234


def test_restore_track_position_sets_duration_and_seeks(manager, model):
    seeks = _record(manager.seek)
    manager.set_current_track(model.index(0))
    manager.set_persistent_state(
        {
            "activeTrackTitle": "Song A",
            "activeTrackArtist": "Artist",
            "activeTrackAlbum": "Album",
            "trackPosition": 500,
        }
    )
    assert manager.duration == 500
    assert seeks == [(manager.position,)]


def test_no_restore_for_other_track(manager, model):
    manager.set_current_track(model.index(0))
    manager.set_persistent_state(
        {
            "activeTrackTitle": "Other",
            "activeTrackArtist": "Artist",
            "activeTrackAlbum": "Album",
            "trackDuration": 1234,
        }
    )
    assert manager.duration == 0


def test_file_url_change_on_current_row_updates_source(manager, model):
    manager.set_current_track(model.index(0))
    sources = _record(manager.track_source_changed)
    model.set_data(model.index(1), "file:///music/other.flac", Fields.RESOURCE_URL)
    assert sources == []
    model.set_data(model.index(0), "file:///music/new.flac", Fields.RESOURCE_URL)
    assert sources == [("file:///music/new.flac",)]


def test_replaced_model_is_disconnected(manager, model):
    manager.set_current_track(model.index(0))
    other = ItemModel()
    manager.set_playlist_model(other)
    sources = _record(manager.track_source_changed)
    model.set_data(model.index(0), "file:///music/new.flac", Fields.RESOURCE_URL)
    assert sources == []
    assert manager.playlist_model is other


def test_play_pause_toggles_with_loaded_media(manager):
    plays = _record(manager.play_track)
    pauses = _record(manager.pause_track)
    manager.set_media_status(MediaStatus.LOADED_MEDIA)
    manager.play_pause()
    manager.play_pause()
    manager.event_queue.process_events()
    assert len(plays) == 1
    assert len(pauses) == 1


def test_play_pause_does_nothing_without_media(manager):
    plays = _record(manager.play_track)
    manager.play_pause()
    manager.event_queue.process_events()
    assert plays == []


def test_stop_enqueues_stop(manager):
    stops = _record(manager.stop_track)
    manager.stop()
    assert manager.event_queue.process_events() == 1
    assert len(stops) == 1


def test_seekable_and_duration_change_once(manager):
    seekable = _record(manager.seekable_changed)
    durations = _record(manager.duration_changed)
    manager.set_seekable(True)
    manager.set_seekable(True)
    manager.set_duration(99)
    manager.set_duration(99)
    assert len(seekable) == 1
    assert len(durations) == 1
    assert manager.seekable is True