"""
Data Models Layer.

This package contains the configuration model, the Spotify API object models,
the metrics snapshot and the explicit session state.
"""

from .config import AppConfig, PlaylistOptions
from .session import SessionState
from .spotify import Album, Artist, Playlist, Track
from .stats import MetricsSnapshot, Statistic

__all__ = [
    "Album",
    "AppConfig",
    "Artist",
    "MetricsSnapshot",
    "Playlist",
    "PlaylistOptions",
    "SessionState",
    "Statistic",
    "Track",
]
