"""Flattening of collection pages into playable track records."""

import logging
from collections.abc import Iterable

from bcradio.catalog.models import CatalogPage
from bcradio.track import AlbumSummary, TrackRecord

logger = logging.getLogger(__name__)


class CatalogNormalizer:
    """Turns collection pages into TrackRecords and running album summaries.

    One normalizer is used for a whole load: the initial page and every
    "load more" page go through the same instance, so `albums` accumulates.
    """

    def __init__(self, playlist_filter: Iterable[str] | None = None) -> None:
        """
        Args:
            playlist_filter: Album ids to keep. None keeps every album.
        """
        self.playlist_filter = (
            frozenset(playlist_filter) if playlist_filter is not None else None
        )
        self.albums: dict[str, AlbumSummary] = {}

    def accepts(self, album_id: str) -> bool:
        return self.playlist_filter is None or album_id in self.playlist_filter

    def normalize(self, page: CatalogPage) -> list[TrackRecord]:
        """Produce the playable records of one page, in page order.

        Tracks without a stream URL are dropped. Albums outside the playlist
        filter, or without item info on the page, produce nothing.

        Args:
            page: Collection page to flatten.

        Returns:
            New records, ready to be appended to the queue.
        """
        records: list[TrackRecord] = []

        for album_id, raw_tracks in page.tracklists.items():
            if not self.accepts(album_id):
                continue

            info = page.item_infos.get(album_id)
            if info is None:
                logger.debug(f"No item info for album {album_id}, skipping")
                continue

            if raw_tracks and album_id not in self.albums:
                first = raw_tracks[0]
                self.albums[album_id] = AlbumSummary(
                    id=album_id,
                    # Upstream tracklists carry no album title
                    title=first.artist or "Unknown Album",
                    artist=first.artist,
                    artwork_id=info.art_id,
                    page_url=info.item_url,
                )

            for rank, raw in enumerate(raw_tracks):
                stream_url = raw.stream_url
                if stream_url is None:
                    continue

                records.append(
                    TrackRecord(
                        artist=raw.artist,
                        title=raw.title,
                        stream_url=stream_url,
                        album_id=album_id,
                        artwork_id=info.art_id,
                        album_page_url=info.item_url,
                        recency_rank=rank,
                    )
                )
                self.albums[album_id].track_count += 1

        logger.debug(
            f"Normalized {len(records)} tracks from {len(page.tracklists)} albums"
        )
        return records
