"""Playback coordination, track metadata and an SQLite track library for a music player."""

__version__ = "0.1.0"