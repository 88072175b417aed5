"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .stats import Statistic

DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"
DEFAULT_PRESET = "top-favorites"

# Named playlist variants: naming plus the statistics computed for it
PLAYLIST_PRESETS = {
    "top-favorites": {
        "name": "My Top Favorite Songs",
        "description": "A playlist of your top favorite songs with added insights",
        "metrics": [
            Statistic.AVERAGE_POPULARITY,
            Statistic.AVERAGE_RELEASE_YEAR,
            Statistic.UNIQUE_ARTISTS,
            Statistic.AVERAGE_DURATION,
        ],
    },
    "discover": {
        "name": "My Custom Discover Weekly",
        "description": "A custom playlist built from your top tracks",
        "metrics": [
            Statistic.AVERAGE_POPULARITY,
            Statistic.GENRE_DIVERSITY,
        ],
    },
}


class PlaylistOptions(BaseModel):
    """The resolved naming and metrics policy for one playlist creation."""

    name: str
    description: str
    metrics: list[Statistic]
    require_population: bool = False


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Authorization
    client_id: str = ""
    redirect_uri: str = DEFAULT_REDIRECT_URI

    # Playlist settings
    preset: str = DEFAULT_PRESET
    playlist_name: str = ""
    playlist_description: str = ""
    metrics: list[Statistic] = Field(default_factory=list)
    metrics_require_population: bool = False

    # Transport
    request_timeout: float | None = None

    # Internal fields not loaded from INI file
    config_path: str = Field(..., repr=False)

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        """Spotify client IDs are alphanumeric; empty means not configured yet."""
        if v and not v.isalnum():
            raise ValueError(f"Client ID must be alphanumeric, but got: {v}")
        return v

    @field_validator("redirect_uri")
    @classmethod
    def validate_redirect_uri(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Redirect URI must be an http(s) URL.")
        return v

    @field_validator("preset")
    @classmethod
    def validate_preset(cls, v: str) -> str:
        if v not in PLAYLIST_PRESETS:
            raise ValueError(
                f"Unknown preset '{v}'. Choose one of: {', '.join(PLAYLIST_PRESETS)}."
            )
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("Request timeout must be a positive number of seconds.")
        return v

    @model_validator(mode="after")
    def validate_metrics_unique(self) -> "AppConfig":
        if len(set(self.metrics)) != len(self.metrics):
            raise ValueError("Metrics list contains duplicates.")
        return self

    def playlist_options(self) -> PlaylistOptions:
        """Merges explicit playlist settings over the selected preset."""
        preset = PLAYLIST_PRESETS[self.preset]
        return PlaylistOptions(
            name=self.playlist_name or preset["name"],
            description=self.playlist_description or preset["description"],
            metrics=list(self.metrics or preset["metrics"]),
            require_population=self.metrics_require_population,
        )

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
