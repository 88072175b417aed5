"""
Descriptive statistics over a track collection.

Each Statistic maps to one calculator; a metrics policy is just the list of
statistics to run.
"""

import logging
import math
import re
from collections.abc import Callable, Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from spotify_insights.exceptions import EmptyTrackCollectionError
from spotify_insights.models.spotify import Track
from spotify_insights.models.stats import MetricsSnapshot, Statistic

log = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000
_YEAR_RE = re.compile(r"^(\d{4})")


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _round_cents(value: float) -> float:
    """Rounds to 2 decimals with ties going up, as displayed."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def release_year(track: Track) -> int | None:
    """The 4-digit year prefix of the album release date, if there is one."""
    match = _YEAR_RE.match(track.album.release_date or "")
    return int(match.group(1)) if match else None


def average_popularity(tracks: Sequence[Track]) -> float:
    return _round_cents(_mean([t.popularity for t in tracks]))


def average_release_year(tracks: Sequence[Track]) -> int | None:
    years = [y for y in map(release_year, tracks) if y is not None]
    if not years:
        log.debug("No track has a parseable release year.")
        return None
    return _round_half_up(_mean(years))


def unique_artists(tracks: Sequence[Track]) -> int:
    return len({t.lead_artist for t in tracks if t.lead_artist is not None})


def average_duration(tracks: Sequence[Track]) -> float:
    """Mean track length in minutes."""
    return _round_cents(_mean([t.duration_ms / MS_PER_MINUTE for t in tracks]))


def genre_diversity(tracks: Sequence[Track]) -> int:
    """
    Number of distinct genres across every artist of every track.

    Artist objects embedded in top-track responses normally carry no genres, so
    this is usually 0 unless the tracks were enriched with full artist objects.
    """
    return len({g for t in tracks for a in t.artists for g in a.genres})


CALCULATORS: dict[Statistic, Callable[[Sequence[Track]], float | int | None]] = {
    Statistic.AVERAGE_POPULARITY: average_popularity,
    Statistic.AVERAGE_RELEASE_YEAR: average_release_year,
    Statistic.UNIQUE_ARTISTS: unique_artists,
    Statistic.AVERAGE_DURATION: average_duration,
    Statistic.GENRE_DIVERSITY: genre_diversity,
}


def compute_metrics(
    tracks: Sequence[Track], statistics: Iterable[Statistic]
) -> MetricsSnapshot:
    """
    Computes the selected statistics over the full collection.

    Raises:
        EmptyTrackCollectionError: The collection has no tracks.
    """
    if not tracks:
        raise EmptyTrackCollectionError("Cannot compute metrics over zero tracks.")

    values = {stat.value: CALCULATORS[stat](tracks) for stat in statistics}
    snapshot = MetricsSnapshot(track_count=len(tracks), **values)
    log.debug(f"Computed metrics over {len(tracks)} tracks: {values}")
    return snapshot
