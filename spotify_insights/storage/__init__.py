"""
Storage Layer.

This package handles all data persistence: the INI configuration file and the
single slot holding the access token.
"""

from .config_manager import ConfigManager
from .token_store import TokenStore

__all__ = ["ConfigManager", "TokenStore"]
