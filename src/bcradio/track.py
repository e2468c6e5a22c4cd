"""Track data model - playable songs and the albums they belong to."""

from dataclasses import dataclass


@dataclass(eq=False)
class TrackRecord:
    """One playable song in the queue.

    Records compare by identity: two songs with identical metadata are still
    separate queue entries. `is_skipped` and `is_favorite` belong to the album
    and are only changed through the TrackListStore, which keeps them equal
    across every record sharing an `album_id`.
    """

    artist: str
    title: str
    stream_url: str
    album_id: str
    artwork_id: str | None
    album_page_url: str
    recency_rank: int
    is_played: bool = False
    is_skipped: bool = False
    is_favorite: bool = False

    @property
    def formatted_title(self) -> str:
        return f"{self.artist} - {self.title}"


@dataclass
class AlbumSummary:
    """Display-only summary of one collection item."""

    id: str
    title: str
    artist: str
    artwork_id: str | None
    page_url: str
    track_count: int = 0
