"""
Creates a private playlist from the session's track collection and derives
metrics over the same tracks.
"""

import logging

from pydantic import ValidationError

from spotify_insights.api.client import SpotifyAPIClient
from spotify_insights.exceptions import (
    AuthorizationError,
    EmptyTrackCollectionError,
    NotAuthenticatedError,
    TransportError,
)
from spotify_insights.models.config import PlaylistOptions
from spotify_insights.models.session import SessionState
from spotify_insights.models.spotify import Playlist

from .metrics import compute_metrics

log = logging.getLogger(__name__)


class PlaylistComposer:
    """
    Runs the create -> populate -> summarise sequence.

    Each step only runs if the previous one succeeded. A playlist that was
    created but could not be populated is left as-is on the remote side.
    """

    def __init__(self, api_client: SpotifyAPIClient, options: PlaylistOptions):
        self.api_client = api_client
        self.options = options

    async def create_playlist(self, state: SessionState) -> Playlist | None:
        """
        Creates and populates a playlist from the current track collection.

        Returns:
            The created playlist, or None if creation failed.

        Raises:
            EmptyTrackCollectionError: There are no tracks; nothing is sent.
            NotAuthenticatedError: The session has no credential.
        """
        # Snapshot so metrics read exactly the tracks that were sent
        tracks = list(state.tracks)
        if not tracks:
            raise EmptyTrackCollectionError(
                "Fetch your top tracks before creating a playlist."
            )
        if not state.is_authenticated:
            raise NotAuthenticatedError("Log in before creating a playlist.")

        try:
            response = await self.api_client.create_playlist(
                state.credential,
                name=self.options.name,
                description=self.options.description,
                public=False,
            )
            playlist = Playlist.model_validate(response)
        except (AuthorizationError, TransportError) as e:
            log.error(f"[red]Error creating playlist:[/red] {e}")
            return None
        except ValidationError as e:
            log.error(f"[red]Error creating playlist: unexpected response:[/red] {e}")
            return None

        log.debug(f"Created playlist {playlist.id} ('{playlist.name}').")

        uris = [t.uri for t in tracks]
        populated = True
        try:
            await self.api_client.add_tracks_to_playlist(
                state.credential, playlist.id, uris
            )
        except (AuthorizationError, TransportError) as e:
            populated = False
            log.error(
                f"[red]Error adding {len(uris)} tracks to playlist {playlist.id}:[/red]"
                f" {e}"
            )

        state.playlist = playlist
        state.populated = populated

        if populated or not self.options.require_population:
            state.metrics = compute_metrics(tracks, self.options.metrics)
        else:
            log.warning(
                "[yellow]Skipping metrics because the playlist could not be "
                "populated.[/yellow]"
            )

        return playlist
