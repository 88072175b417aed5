from spotify_insights.models.stats import Statistic
from spotify_insights.utils.formatting import (
    format_artists,
    format_statistic,
    format_track_length,
)
from tests.support.factories import make_track


def test_format_track_length():
    assert format_track_length(187000) == "3:07"
    assert format_track_length(59999) == "0:59"
    assert format_track_length(0) == "0:00"


def test_format_artists():
    assert format_artists(make_track(artists=("A", "B"))) == "A, B"
    assert format_artists(make_track(artists=())) == "Unknown Artist"


def test_format_statistic():
    assert format_statistic(Statistic.AVERAGE_POPULARITY, 20.0) == "20.00"
    assert format_statistic(Statistic.AVERAGE_DURATION, 3.5) == "3.50 minutes"
    assert format_statistic(Statistic.AVERAGE_RELEASE_YEAR, 2021) == "2021"
    assert format_statistic(Statistic.UNIQUE_ARTISTS, 2) == "2"
