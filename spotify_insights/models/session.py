"""
Process-wide session state shared by the session manager, fetcher and composer.
"""

from dataclasses import dataclass, field

from .spotify import Playlist, Track
from .stats import MetricsSnapshot


@dataclass
class SessionState:
    """
    Holds the live credential and everything derived from it.

    A single command owns one instance; components mutate it in place and
    always replace values wholesale.
    """

    credential: str | None = None
    tracks: list[Track] = field(default_factory=list)
    playlist: Playlist | None = None
    metrics: MetricsSnapshot | None = None
    populated: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.credential)

    def reset(self) -> None:
        """Drops the credential and all state derived from it."""
        self.credential = None
        self.tracks = []
        self.playlist = None
        self.metrics = None
        self.populated = False
