"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SpotifyInsightsError(Exception):
    """Base exception for all application-specific errors."""


class MalformedRedirectError(SpotifyInsightsError):
    """Raised when a redirect fragment is present but carries no access token."""


class AuthorizationError(SpotifyInsightsError):
    """Raised when the Spotify API rejects the credential (401 or 403)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class TransportError(SpotifyInsightsError):
    """
    Raised on network failures, timeouts, and any other non-2xx API response.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotAuthenticatedError(SpotifyInsightsError):
    """Raised when an API operation is attempted without a credential."""


class EmptyTrackCollectionError(SpotifyInsightsError):
    """Raised when playlist creation or metrics are requested with no tracks."""


class ConfigurationError(SpotifyInsightsError):
    """Raised for issues related to configuration loading or validation."""
