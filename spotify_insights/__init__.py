"""
spotify-insights: build a playlist from your Spotify top tracks and summarise them.
"""

__version__ = "0.1.0"
