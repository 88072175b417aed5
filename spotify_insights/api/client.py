"""
Async client for the Spotify Web API endpoints the app uses.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp

from spotify_insights.exceptions import AuthorizationError, TransportError

log = logging.getLogger(__name__)


class SpotifyAPIClient:
    """
    Thin async client for the Spotify Web API (v1).

    Every call is a single bearer-authenticated request. There is no retry,
    backoff or pagination; failures surface as AuthorizationError or
    TransportError for the caller to handle.
    """

    BASE_URL = "https://api.spotify.com/v1/"
    TOP_TRACKS_LIMIT = 50

    def __init__(
        self,
        request_timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the API client.

        Args:
            request_timeout: Total seconds allowed per request. None waits indefinitely.
            session: An existing session to use instead of creating one.
        """
        self.request_timeout = request_timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "SpotifyAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
            )
            self._owns_session = True

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def api_call(
        self,
        method: str,
        endpoint: str,
        token: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Makes one authenticated API call and returns the decoded JSON body.

        Raises:
            AuthorizationError: The API answered 401 or 403.
            TransportError: Network failure, timeout, or any other non-2xx status.
        """
        await self._initialize_session()

        headers = {"Authorization": f"Bearer {token}"}
        url = self.BASE_URL + endpoint
        start_time = time.monotonic()

        try:
            async with self._session.request(
                method, url, params=params, json=payload, headers=headers
            ) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"{method} {endpoint} -> {r.status} ({duration_ms:.0f} ms)")

                if r.status in (401, 403):
                    raise AuthorizationError(
                        f"Spotify rejected the access token for {endpoint} "
                        f"(HTTP {r.status}).",
                        status=r.status,
                    )
                if not 200 <= r.status < 300:
                    raise TransportError(
                        f"{method} {endpoint} failed with HTTP {r.status}: "
                        f"{await r.text()}",
                        status=r.status,
                    )
                return await r.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(f"{method} {endpoint} failed: {e!r}") from e

    # Public API Methods
    async def fetch_top_tracks(
        self, token: str, limit: int = TOP_TRACKS_LIMIT
    ) -> Dict[str, Any]:
        return await self.api_call(
            "GET", "me/top/tracks", token, params={"limit": limit}
        )

    async def create_playlist(
        self, token: str, name: str, description: str, public: bool = False
    ) -> Dict[str, Any]:
        return await self.api_call(
            "POST",
            "me/playlists",
            token,
            payload={"name": name, "description": description, "public": public},
        )

    async def add_tracks_to_playlist(
        self, token: str, playlist_id: str, uris: List[str]
    ) -> Dict[str, Any]:
        return await self.api_call(
            "POST", f"playlists/{playlist_id}/tracks", token, payload={"uris": uris}
        )
