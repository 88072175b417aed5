"""
Handles the implicit-grant authorization flow: building the authorize URL,
extracting the access token from the redirect fragment, and persisting it.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit, urlunsplit

from spotify_insights.exceptions import MalformedRedirectError
from spotify_insights.models.session import SessionState
from spotify_insights.storage.token_store import TokenStore

log = logging.getLogger(__name__)

AUTH_ENDPOINT = "https://accounts.spotify.com/authorize"
RESPONSE_TYPE = "token"
SCOPES = (
    "playlist-read-private",
    "user-top-read",
    "playlist-modify-public",
    "playlist-modify-private",
)


def build_authorize_url(
    client_id: str, redirect_uri: str, scopes: tuple[str, ...] = SCOPES
) -> str:
    """Builds the URL the user must visit to grant access."""
    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": RESPONSE_TYPE,
            "scope": ",".join(scopes),
        },
        safe=",:/",
    )
    return f"{AUTH_ENDPOINT}?{query}"


def parse_access_token(fragment: str) -> str:
    """
    Extracts the access token from a redirect fragment.

    Args:
        fragment: The fragment, with or without the leading '#',
            e.g. 'access_token=ABC&token_type=Bearer'.

    Raises:
        MalformedRedirectError: No non-empty 'access_token' key is present.
    """
    for pair in fragment.lstrip("#").split("&"):
        key, _, value = pair.partition("=")
        if key == "access_token" and value:
            return value
    raise MalformedRedirectError("Redirect fragment does not contain an access token.")


@dataclass
class RedirectLocation:
    """The URL the authorization server redirected the user back to."""

    url: str

    @property
    def fragment(self) -> str:
        return urlsplit(self.url).fragment

    def clear_fragment(self) -> None:
        """Drops the fragment so the token can't be extracted again."""
        self.url = urlunsplit(urlsplit(self.url)._replace(fragment=""))


class SessionManager:
    """
    Owns the credential lifecycle for one session.

    Exactly one of {persisted credential, freshly extracted credential, none}
    results from initialize().
    """

    def __init__(
        self,
        store: TokenStore,
        state: SessionState | None = None,
        client_id: str = "",
        redirect_uri: str = "",
    ):
        self._store = store
        self.state = state if state is not None else SessionState()
        self.client_id = client_id
        self.redirect_uri = redirect_uri

    @property
    def credential(self) -> str | None:
        return self.state.credential

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def initialize(self, location: RedirectLocation | None = None) -> str | None:
        """
        Resolves the session credential on startup.

        A persisted token wins and the fragment is ignored. Otherwise a token in
        the redirect fragment is persisted and the fragment cleared. A fragment
        without a token leaves the session unauthenticated.
        """
        token = self._store.get()

        if token:
            log.debug("Using persisted access token.")
        elif location is not None and location.fragment:
            try:
                token = parse_access_token(location.fragment)
            except MalformedRedirectError as e:
                log.warning(f"[yellow]Ignoring redirect:[/yellow] {e}")
                token = None
            else:
                self._store.set(token)
                location.clear_fragment()
                log.info("[green]Access token stored.[/green]")

        self.state.credential = token
        return token

    def login_url(self) -> str:
        return build_authorize_url(self.client_id, self.redirect_uri)

    def logout(self) -> None:
        """Forgets the credential in memory and on disk. Safe to call repeatedly."""
        if self.state.is_authenticated:
            log.info("Logging out.")
        self.state.reset()
        self._store.remove()
