"""
Spotify API Layer.

This package handles all communication with the Spotify Web API and the
implicit-grant authorization flow.
"""

from .auth import RedirectLocation, SessionManager, build_authorize_url
from .client import SpotifyAPIClient

__all__ = [
    "RedirectLocation",
    "SessionManager",
    "SpotifyAPIClient",
    "build_authorize_url",
]
