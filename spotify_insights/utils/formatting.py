"""
Helper functions for formatting data into human-readable strings.
"""

from spotify_insights.models.spotify import Track
from spotify_insights.models.stats import Statistic


def format_track_length(duration_ms: int) -> str:
    """Formats a duration in milliseconds as 'm:ss' (e.g., '3:07')."""
    minutes, secs = divmod(max(duration_ms, 0) // 1000, 60)
    return f"{minutes}:{secs:02d}"


def format_artists(track: Track) -> str:
    """Comma-separated list of all artists on the track."""
    return ", ".join(a.name for a in track.artists) or "Unknown Artist"


def format_statistic(stat: Statistic, value: float | int) -> str:
    """Renders a statistic the way the insights panel shows it."""
    if stat in (Statistic.AVERAGE_POPULARITY, Statistic.AVERAGE_DURATION):
        text = f"{value:.2f}"
        return f"{text} minutes" if stat is Statistic.AVERAGE_DURATION else text
    return str(value)
