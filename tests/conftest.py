import pytest

from spotify_insights.exceptions import TransportError
from spotify_insights.models.session import SessionState
from spotify_insights.storage.token_store import TokenStore


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep the real config directory and client ID out of every test."""
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    yield


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(tmp_path / "config")


@pytest.fixture
def state():
    return SessionState(credential="ABC123")


@pytest.fixture
def transport_error():
    return TransportError("POST me/playlists failed with HTTP 500", status=500)
