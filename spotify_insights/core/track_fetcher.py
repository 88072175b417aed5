"""
Retrieves the user's top tracks into the session's track collection.
"""

import logging

from pydantic import ValidationError

from spotify_insights.api.client import SpotifyAPIClient
from spotify_insights.exceptions import (
    AuthorizationError,
    NotAuthenticatedError,
    TransportError,
)
from spotify_insights.models.session import SessionState
from spotify_insights.models.spotify import Track

log = logging.getLogger(__name__)


class TrackFetcher:
    """Fetches one fixed-size page of top tracks per call."""

    def __init__(self, api_client: SpotifyAPIClient):
        self.api_client = api_client

    async def fetch_top_tracks(self, state: SessionState) -> list[Track]:
        """
        Replaces the state's track collection with the current top tracks.

        Failures are logged and leave the previous collection in place; the
        returned list is whatever the collection holds afterwards.

        Raises:
            NotAuthenticatedError: The session has no credential.
        """
        if not state.is_authenticated:
            raise NotAuthenticatedError("Log in before fetching top tracks.")

        try:
            response = await self.api_client.fetch_top_tracks(
                state.credential, limit=SpotifyAPIClient.TOP_TRACKS_LIMIT
            )
            tracks = [Track.model_validate(item) for item in response.get("items") or []]
        except AuthorizationError as e:
            log.error(
                f"[red]Error fetching top tracks:[/red] {e} "
                "Your token may have expired; log in again."
            )
            return state.tracks
        except TransportError as e:
            log.error(f"[red]Error fetching top tracks:[/red] {e}")
            return state.tracks
        except (ValidationError, AttributeError, TypeError) as e:
            log.error(f"[red]Error fetching top tracks: unexpected response:[/red] {e}")
            return state.tracks

        state.tracks = tracks
        log.debug(f"Fetched {len(tracks)} top tracks.")
        return tracks
