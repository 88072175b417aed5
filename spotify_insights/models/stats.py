"""
Statistic identifiers and the metrics snapshot computed over a track collection.
"""

from dataclasses import dataclass, fields
from enum import Enum


class Statistic(str, Enum):
    """The statistic computations a metrics policy can select."""

    AVERAGE_POPULARITY = "average_popularity"
    AVERAGE_RELEASE_YEAR = "average_release_year"
    UNIQUE_ARTISTS = "unique_artists"
    AVERAGE_DURATION = "average_duration"
    GENRE_DIVERSITY = "genre_diversity"


STATISTIC_LABELS = {
    Statistic.AVERAGE_POPULARITY: "Average Popularity",
    Statistic.AVERAGE_RELEASE_YEAR: "Average Release Year",
    Statistic.UNIQUE_ARTISTS: "Unique Artists",
    Statistic.AVERAGE_DURATION: "Average Duration",
    Statistic.GENRE_DIVERSITY: "Genre Diversity",
}


@dataclass(frozen=True)
class MetricsSnapshot:
    """
    Aggregate statistics derived from one track collection.

    Fields are None when their statistic was not part of the active policy.
    """

    track_count: int
    average_popularity: float | None = None
    average_release_year: int | None = None
    unique_artists: int | None = None
    average_duration: float | None = None
    genre_diversity: int | None = None

    def computed(self) -> dict[Statistic, float | int]:
        """Returns the statistics that were computed, in declaration order."""
        result = {}
        for f in fields(self):
            if f.name == "track_count":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[Statistic(f.name)] = value
        return result
