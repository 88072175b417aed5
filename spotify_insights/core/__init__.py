"""
Core application engine.

The `TrackFetcher` fills the session's track collection, and the
`PlaylistComposer` turns that collection into a remote playlist plus a
metrics snapshot computed by `compute_metrics`.
"""

from .metrics import compute_metrics
from .playlist_composer import PlaylistComposer
from .track_fetcher import TrackFetcher

__all__ = ["PlaylistComposer", "TrackFetcher", "compute_metrics"]
