"""Data models and errors for collection pages fetched from Bandcamp."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from bcradio.config.constants import PREFERRED_STREAM_FORMATS


class CatalogError(Exception):
    """Base class for failures while loading collection data."""


class CatalogFetchError(CatalogError):
    """The upstream request failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayloadError(CatalogError):
    """The upstream response did not contain the expected collection data."""


@dataclass(frozen=True)
class ItemInfo:
    """Artwork and link metadata for one collection item."""

    art_id: str | None
    item_url: str


@dataclass(frozen=True)
class RawTrack:
    """One track entry as it appears in an album's upstream tracklist."""

    artist: str
    title: str
    files: Mapping[str, str] = field(default_factory=dict)

    @property
    def stream_url(self) -> str | None:
        """Best available stream URL, or None if the track cannot be streamed."""
        for encoding in PREFERRED_STREAM_FORMATS:
            url = self.files.get(encoding)
            if url:
                return url
        return None


@dataclass(frozen=True)
class CatalogPage:
    """One page of collection data.

    The initial page also carries the fan summary fields; "load more" pages
    leave them unset.
    """

    item_infos: dict[str, ItemInfo]
    tracklists: dict[str, list[RawTrack]]
    last_token: str | None = None
    more_available: bool = False
    item_count: int | None = None
    fan_id: int | None = None
    fan_name: str | None = None
    authenticated: bool = False


@dataclass
class CollectionStats:
    """How much of a collection has been loaded so far."""

    total: int
    loaded: int

    @property
    def has_more(self) -> bool:
        return self.total > self.loaded

    @property
    def percent_loaded(self) -> int:
        if self.total <= 0:
            return 100
        return round(self.loaded / self.total * 100)
