import asyncio

import pytest

from spotify_insights.api.client import SpotifyAPIClient
from spotify_insights.exceptions import AuthorizationError, TransportError
from tests.support.factories import playlist_payload, track_payload
from tests.support.stubs import FakeResponse, FakeSession, connection_error


def _run(coro):
    return asyncio.run(coro)


def test_fetch_top_tracks_sends_bearer_and_limit():
    body = {"items": [track_payload()], "limit": 50, "total": 1}
    session = FakeSession(FakeResponse(200, body))
    client = SpotifyAPIClient(session=session)

    assert _run(client.fetch_top_tracks("ABC123")) == body

    (request,) = session.requests
    assert request["method"] == "GET"
    assert request["url"] == "https://api.spotify.com/v1/me/top/tracks"
    assert request["params"] == {"limit": 50}
    assert request["headers"] == {"Authorization": "Bearer ABC123"}


def test_create_playlist_posts_private_playlist():
    session = FakeSession(FakeResponse(201, playlist_payload()))
    client = SpotifyAPIClient(session=session)

    result = _run(client.create_playlist("ABC123", "Name", "Desc"))

    assert result["id"] == "pl1"
    (request,) = session.requests
    assert request["method"] == "POST"
    assert request["url"] == "https://api.spotify.com/v1/me/playlists"
    assert request["json"] == {"name": "Name", "description": "Desc", "public": False}


def test_add_tracks_posts_ordered_uris():
    session = FakeSession(FakeResponse(201, {"snapshot_id": "s"}))
    client = SpotifyAPIClient(session=session)

    _run(client.add_tracks_to_playlist("ABC123", "pl1", ["spotify:track:b", "spotify:track:a"]))

    (request,) = session.requests
    assert request["url"] == "https://api.spotify.com/v1/playlists/pl1/tracks"
    assert request["json"] == {"uris": ["spotify:track:b", "spotify:track:a"]}


@pytest.mark.parametrize("status", [401, 403])
def test_unauthorized_maps_to_authorization_error(status):
    session = FakeSession(FakeResponse(status, {"error": {"status": status}}))
    client = SpotifyAPIClient(session=session)

    with pytest.raises(AuthorizationError) as excinfo:
        _run(client.fetch_top_tracks("expired"))
    assert excinfo.value.status == status


@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
def test_other_non_2xx_maps_to_transport_error(status):
    session = FakeSession(FakeResponse(status, {"error": {"status": status}}))
    client = SpotifyAPIClient(session=session)

    with pytest.raises(TransportError) as excinfo:
        _run(client.create_playlist("ABC123", "Name", "Desc"))
    assert excinfo.value.status == status


def test_network_failure_maps_to_transport_error():
    client = SpotifyAPIClient(session=FakeSession(error=connection_error()))

    with pytest.raises(TransportError) as excinfo:
        _run(client.fetch_top_tracks("ABC123"))
    assert excinfo.value.status is None


def test_invalid_json_maps_to_transport_error():
    client = SpotifyAPIClient(session=FakeSession(FakeResponse(200, "not json")))

    with pytest.raises(TransportError):
        _run(client.fetch_top_tracks("ABC123"))


def test_does_not_close_injected_session():
    session = FakeSession()

    async def _use():
        async with SpotifyAPIClient(session=session):
            pass

    _run(_use())
    assert session.closed is False
