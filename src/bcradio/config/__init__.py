"""Configuration module for bcradio.

This module provides a two-tier configuration system:
- constants: Pure constants that never change (endpoints, limits, etc.)
- settings: Runtime settings loaded from environment variables
"""

# Re-export all constants
from bcradio.config.constants import (
    BANDCAMP_BASE_URL,
    COLLECTION_ITEMS_URL,
    DEFAULT_HISTORY,
    DEFAULT_LISTENER_ID,
    IDENTITY_COOKIE_NAME,
    JSON_DATA_TYPE,
    MAXIMUM_PLAYLISTS_PER_USER,
    PAGEDATA_ELEMENT_ID,
    PLAYLIST_FIELD_SEPARATOR,
    PLAYLIST_LINE_SEPARATOR,
    PLAYLIST_SELECTION_SEPARATOR,
    PREFERRED_STREAM_FORMATS,
)

# Re-export settings class
from bcradio.config.settings import RadioSettings

__all__ = [
    # Constants
    "BANDCAMP_BASE_URL",
    "COLLECTION_ITEMS_URL",
    "DEFAULT_HISTORY",
    "DEFAULT_LISTENER_ID",
    "IDENTITY_COOKIE_NAME",
    "JSON_DATA_TYPE",
    "MAXIMUM_PLAYLISTS_PER_USER",
    "PAGEDATA_ELEMENT_ID",
    "PLAYLIST_FIELD_SEPARATOR",
    "PLAYLIST_LINE_SEPARATOR",
    "PLAYLIST_SELECTION_SEPARATOR",
    "PREFERRED_STREAM_FORMATS",
    # Settings class
    "RadioSettings",
]
