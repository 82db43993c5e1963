# corplayer

The core of a music player, with no user interface and no audio output of
its own. It provides:

- `corplayer.playerutils`: the shared enums (`PlaylistEnqueueMode`,
  `PlaylistEnqueueTriggerPlay`, `SkipReason`, `PlaylistEntryType`,
  `FilterType`), `is_playlist(mime_type)` for recognising playlist MIME types,
  and `calculate_track_hash(*columns)`, an MD5 hex digest of string columns;
- `corplayer.metadata`: the `Fields` and `PlaylistFields` role enums and the
  `TrackFields` and `EntryFields` records;
- `corplayer.signals`: `Signal` (connect, disconnect, emit) and `EventQueue`
  (post callbacks, run them with `process_events()`);
- `corplayer.itemmodel`: `ItemModel`, a list model of role-to-value rows, and
  `ModelIndex`, a position in it;
- `corplayer.playermanager.PlayerManager`: whether play, skip back and skip
  forward are possible, given the previous, current and next tracks;
- `corplayer.trackmetadata.TrackMetadata`: the metadata of the current track,
  read from a model index, with a signal per field that changes;
- `corplayer.activetrackmanager.ActiveTrackManager`: reacts to media status,
  playback state, errors and position changes, and issues play, pause, stop,
  skip and seek requests through signals;
- `corplayer.database`: an SQLite track library: `CorDatabase`,
  `DbConnectionPool` and `DbConnection`, `SqlQuery`, `SqlTransaction`,
  `DbSchema`, `DatabaseManager` and `TrackDatabase`.

## Installation

```
pip install .
```

Nothing beyond the standard library is needed.

## Signals and the event queue

```python
from corplayer.signals import EventQueue, Signal

changed = Signal()
changed.connect(lambda value: print("changed to", value))
changed.emit(42)

queue = EventQueue()
queue.post(lambda: print("deferred"))
queue.process_events()  # runs the callback, returns 1
```

## Track metadata

```python
from corplayer.metadata import Fields, TrackFields

track = TrackFields()
track.insert(Fields.TITLE, "Song")
track.insert(Fields.ARTIST, "Artist")
print(track.get(Fields.TITLE), track.contains(Fields.ALBUM))
print(track.generate_hash())
```

`generate_hash()` hashes title, artist, album, album artist, genre, year,
duration, bit rate, resource URL and file type, in that order.

## Driving playback

`ActiveTrackManager` does not play anything itself. Connect its request
signals (`play_track`, `pause_track`, `stop_track`, `skip_next_track`, `seek`,
`track_source_changed`) to a player, and feed the player's reports back with
`set_media_status`, `set_playback_state`, `set_track_error`, `set_duration`,
`set_position` and `set_seekable`. Deferred requests are posted to its
`event_queue`.

```python
from corplayer.activetrackmanager import ActiveTrackManager
from corplayer.itemmodel import ItemModel
from corplayer.metadata import Fields

model = ItemModel()
index = model.append_row(
    {Fields.TITLE: "Song", Fields.RESOURCE_URL: "file:///music/song.flac"}
)

manager = ActiveTrackManager()
manager.set_playlist_model(model)
manager.track_source_changed.connect(lambda url: print("load", url))
manager.play_track.connect(lambda: print("play"))

manager.set_current_track(index)        # prints "load file:///music/song.flac"
manager.ensure_play()
manager.event_queue.process_events()    # prints "play"
```

## Track library

```python
from corplayer.database.databasemanager import DatabaseManager
from corplayer.database.dbconnection import DbConnection
from corplayer.database.trackdatabase import TrackDatabase
from corplayer.metadata import Fields, TrackFields

manager = DatabaseManager.instance()
status = manager.initialize("/tmp/corplayer.db")  # DbStatus.OK on success

tracks_db = TrackDatabase()
tracks_db.initialize(DbConnection(manager.db_connection_pool))

track = TrackFields()
track.insert(Fields.RESOURCE_URL, "file:///music/song.flac")
track.insert(Fields.TITLE, "Song")
track.insert(Fields.DURATION, 215000)
track.insert(Fields.HASH, track.generate_hash())

tracks_db.insert_tracks([track])
track_id = track.get(Fields.DATABASE_ID)
print(tracks_db.fetch_track_from_id(track_id).get(Fields.TITLE))
print(len(tracks_db.get_tracks()))
```

`insert_tracks` adds every track that has no database id yet and stores the
new id on it. `update_tracks` writes back tracks that have an id;
`delete_tracks` returns True only if every track had an id and was deleted.
`fetch_track_id_from_file_name` returns 0 when no track matches.

## What is not included

The package has no command, no window and no audio back end: it does not
decode or play files, read tags from audio files, scan folders, or load and
save playlist files. It keeps playback state and a track library for a
program that does those things.

## Tests

```
pip install .[test]
pytest
```