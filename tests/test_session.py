from urllib.parse import parse_qs, urlsplit

import pytest

from spotify_insights.api.auth import (
    SCOPES,
    RedirectLocation,
    SessionManager,
    build_authorize_url,
    parse_access_token,
)
from spotify_insights.exceptions import MalformedRedirectError
from spotify_insights.models.session import SessionState

REDIRECT = "http://127.0.0.1:8888/callback"


class TestParseAccessToken:
    def test_extracts_token(self):
        assert parse_access_token("access_token=ABC123&token_type=Bearer") == "ABC123"

    def test_accepts_leading_hash(self):
        assert parse_access_token("#token_type=Bearer&access_token=XYZ") == "XYZ"

    def test_missing_key_raises(self):
        with pytest.raises(MalformedRedirectError):
            parse_access_token("token_type=Bearer&expires_in=3600")

    def test_empty_value_raises(self):
        with pytest.raises(MalformedRedirectError):
            parse_access_token("access_token=&token_type=Bearer")

    def test_prefix_of_other_key_is_not_a_match(self):
        with pytest.raises(MalformedRedirectError):
            parse_access_token("access_token_hint=nope")


class TestRedirectLocation:
    def test_clear_fragment(self):
        location = RedirectLocation(f"{REDIRECT}#access_token=ABC123")
        location.clear_fragment()
        assert location.fragment == ""
        assert location.url == REDIRECT


class TestInitialize:
    def test_fragment_token_is_extracted_persisted_and_cleared(self, token_store):
        session = SessionManager(token_store)
        location = RedirectLocation(f"{REDIRECT}#access_token=ABC123&token_type=Bearer")

        assert session.initialize(location) == "ABC123"

        assert session.credential == "ABC123"
        assert token_store.get() == "ABC123"
        assert location.fragment == ""

    def test_no_fragment_no_persisted_token_is_unauthenticated(self, token_store):
        session = SessionManager(token_store)

        assert session.initialize(RedirectLocation(REDIRECT)) is None
        assert session.initialize() is None
        assert not session.is_authenticated

    def test_malformed_fragment_is_unauthenticated(self, token_store):
        session = SessionManager(token_store)
        location = RedirectLocation(f"{REDIRECT}#error=access_denied")

        assert session.initialize(location) is None
        assert not session.is_authenticated
        assert token_store.get() is None

    def test_persisted_token_wins_over_fragment(self, token_store):
        token_store.set("STORED")
        session = SessionManager(token_store)
        location = RedirectLocation(f"{REDIRECT}#access_token=FRESH")

        assert session.initialize(location) == "STORED"
        assert token_store.get() == "STORED"
        # The fragment is ignored, not consumed
        assert location.fragment == "access_token=FRESH"

    def test_shares_given_state(self, token_store):
        state = SessionState()
        token_store.set("STORED")
        SessionManager(token_store, state=state).initialize()
        assert state.credential == "STORED"


class TestLogout:
    def test_logout_then_initialize_is_unauthenticated(self, token_store):
        session = SessionManager(token_store)
        session.initialize(RedirectLocation(f"{REDIRECT}#access_token=ABC123"))

        session.logout()

        assert session.credential is None
        assert token_store.get() is None
        fresh = SessionManager(token_store)
        assert fresh.initialize() is None

    def test_logout_clears_derived_state(self, token_store):
        state = SessionState(
            credential="ABC123", tracks=["t"], metrics=object(), populated=True
        )
        SessionManager(token_store, state=state).logout()
        assert state.tracks == []
        assert state.metrics is None
        assert state.populated is False

    def test_logout_is_idempotent(self, token_store):
        session = SessionManager(token_store)
        session.logout()
        session.logout()
        assert not session.is_authenticated


class TestAuthorizeUrl:
    def test_carries_implicit_grant_parameters(self):
        url = build_authorize_url("client123", REDIRECT)
        parts = urlsplit(url)
        query = parse_qs(parts.query)

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://accounts.spotify.com/authorize"
        )
        assert query["client_id"] == ["client123"]
        assert query["redirect_uri"] == [REDIRECT]
        assert query["response_type"] == ["token"]
        assert query["scope"] == [",".join(SCOPES)]

    def test_scopes_are_the_fixed_four(self):
        assert SCOPES == (
            "playlist-read-private",
            "user-top-read",
            "playlist-modify-public",
            "playlist-modify-private",
        )

    def test_session_login_url_uses_configured_app(self, token_store):
        session = SessionManager(token_store, client_id="abc", redirect_uri=REDIRECT)
        assert "client_id=abc" in session.login_url()
