import os
import sqlite3

from corplayer.database.databasemanager import DatabaseManager
from corplayer.database.dbschema import DbStatus


def test_instance_is_shared(tmp_path):
    path = tmp_path / "shared.db"
    DatabaseManager.instance().initialize(path)
    assert DatabaseManager.instance().db_connection_pool.database_name == os.fspath(path)


def test_initialize_creates_schema(tmp_path):
    path = tmp_path / "library.db"
    status = DatabaseManager.instance().initialize(path)
    assert status is DbStatus.OK
    with sqlite3.connect(path) as db:
        tables = {name for (name,) in db.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"Tracks", "Playlists", "PlaylistTracks"} <= tables


def test_initialize_sets_pool(tmp_path):
    path = tmp_path / "pool.db"
    manager = DatabaseManager.instance()
    manager.initialize(path)
    assert manager.db_connection_pool.database_name == os.fspath(path)


def test_initialize_releases_thread_connection(tmp_path):
    manager = DatabaseManager.instance()
    manager.initialize(tmp_path / "release.db")
    assert manager.db_connection_pool.has_connection() is False


def test_reinitialize_replaces_pool(tmp_path):
    manager = DatabaseManager.instance()
    manager.initialize(tmp_path / "first.db")
    first = manager.db_connection_pool
    manager.initialize(tmp_path / "second.db")
    assert manager.db_connection_pool is not first
    assert manager.db_connection_pool.database_name == os.fspath(tmp_path / "second.db")