"""Constants for bcradio.

These are true constants that never change - Bandcamp endpoints, stream formats, limits, etc.
"""

from typing import Any, Final, Iterable, Mapping

# Bandcamp endpoints
BANDCAMP_BASE_URL: Final = "https://bandcamp.com"
COLLECTION_ITEMS_URL: Final = (
    "https://bandcamp.com/api/fancollection/1/collection_items"
)
# Id of the element whose data-blob attribute holds the collection JSON
PAGEDATA_ELEMENT_ID: Final = "pagedata"
IDENTITY_COOKIE_NAME: Final = "identity"

# Stream encodings, best first
PREFERRED_STREAM_FORMATS: Final = ("mp3-v0", "mp3-128")

# Playlist publishing
MAXIMUM_PLAYLISTS_PER_USER: Final = 8
PLAYLIST_FIELD_SEPARATOR: Final = "|"
PLAYLIST_LINE_SEPARATOR: Final = "\r\n"
PLAYLIST_SELECTION_SEPARATOR: Final = ","

# Application defaults
DEFAULT_HISTORY: Final = 200
DEFAULT_LISTENER_ID: Final = "default"

# Type aliases
JSON_DATA_TYPE = str | int | float | bool | Mapping[str, Any] | Iterable[Any] | None
