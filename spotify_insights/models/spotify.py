"""
Pydantic models for the subset of the Spotify Web API objects the app reads.
"""

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    """Read-only snapshot of an API object; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Artist(SpotifyBaseModel):
    name: str
    id: str | None = None
    # Only full artist objects carry genres; simplified ones in track payloads don't.
    genres: list[str] = Field(default_factory=list)


class Album(SpotifyBaseModel):
    name: str = ""
    release_date: str | None = None
    release_date_precision: str | None = None


class Track(SpotifyBaseModel):
    uri: str
    id: str | None = None
    name: str = ""
    popularity: int = Field(default=0, ge=0, le=100)
    duration_ms: int = Field(default=0, ge=0)
    album: Album = Field(default_factory=Album)
    artists: list[Artist] = Field(default_factory=list)

    @property
    def lead_artist(self) -> str | None:
        """Name of the first-listed artist, if any."""
        return self.artists[0].name if self.artists else None


class Playlist(SpotifyBaseModel):
    id: str
    name: str
    description: str | None = None
    public: bool | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)

    @property
    def share_url(self) -> str | None:
        """The open.spotify.com link for the playlist."""
        return self.external_urls.get("spotify")
