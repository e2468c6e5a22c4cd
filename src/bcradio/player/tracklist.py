"""TrackListStore - the single owner of the play queue."""

import logging
import random
from collections.abc import Iterable, Iterator

from bcradio.player import sequencer
from bcradio.player.models import SequencingPolicy
from bcradio.track import TrackRecord

logger = logging.getLogger(__name__)


class TrackListStore:
    """Holds the ordered queue and the per-album skip/favorite state.

    All queue mutation goes through the methods below, which keep every
    record of an album carrying the same `is_skipped` and `is_favorite`.
    """

    def __init__(
        self,
        skipped_albums: Iterable[str] = (),
        favorite_albums: Iterable[str] = (),
    ) -> None:
        """Create an empty queue seeded with persisted album state.

        Args:
            skipped_albums: Album ids the listener excluded permanently.
            favorite_albums: Album ids the listener marked as favorites.
        """
        self._tracks: list[TrackRecord] = []
        self._skipped_albums: set[str] = set(skipped_albums)
        self._favorite_albums: set[str] = set(favorite_albums)

    def __len__(self) -> int:
        return len(self._tracks)

    def __getitem__(self, index: int) -> TrackRecord:
        return self._tracks[index]

    def __iter__(self) -> Iterator[TrackRecord]:
        return iter(self._tracks)

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self._tracks)

    @property
    def skipped_album_ids(self) -> frozenset[str]:
        return frozenset(self._skipped_albums)

    @property
    def favorite_album_ids(self) -> frozenset[str]:
        return frozenset(self._favorite_albums)

    def is_album_skipped(self, album_id: str) -> bool:
        return album_id in self._skipped_albums

    def is_album_favorite(self, album_id: str) -> bool:
        return album_id in self._favorite_albums

    def favorites(self) -> list[TrackRecord]:
        """Records of favorited albums, in queue order."""
        return [track for track in self._tracks if track.is_favorite]

    def append(self, record: TrackRecord) -> None:
        """Add a record to the end of the queue.

        The record takes on its album's current skip/favorite state. There is
        no deduplication; callers must not re-add records.
        """
        record.is_skipped = record.album_id in self._skipped_albums
        record.is_favorite = record.album_id in self._favorite_albums
        if record.is_skipped:
            record.is_played = True
        self._tracks.append(record)

    def extend(self, records: Iterable[TrackRecord]) -> int:
        """Append several records, returning how many were added."""
        count = 0
        for record in records:
            self.append(record)
            count += 1
        return count

    def mark_played(self, index: int) -> None:
        """Mark the record at `index` as played. Out-of-bounds is a no-op."""
        if not self.in_bounds(index):
            return
        self._tracks[index].is_played = True

    def set_album_skipped(self, album_id: str, skipped: bool) -> None:
        """Exclude or re-include every record of an album.

        Skipping also marks the records played so they leave the current
        cycle immediately. Un-skipping makes them eligible again.
        """
        if skipped:
            self._skipped_albums.add(album_id)
        else:
            self._skipped_albums.discard(album_id)

        for track in self._tracks:
            if track.album_id == album_id:
                track.is_skipped = skipped
                track.is_played = skipped

        logger.info(f"Album {album_id} {'skipped' if skipped else 'unskipped'}")

    def set_album_favorite(self, album_id: str, favorite: bool) -> None:
        """Add or remove every record of an album from the favorites view."""
        if favorite:
            self._favorite_albums.add(album_id)
        else:
            self._favorite_albums.discard(album_id)

        for track in self._tracks:
            if track.album_id == album_id:
                track.is_favorite = favorite

    def next_unplayed_index(self, start_from: int) -> int | None:
        """Find the first unplayed record at or after `start_from`.

        When there is none the cycle is exhausted: every record's played flag
        is reset to its skipped flag and None is returned, telling the caller
        to re-sequence and ask again from 0.
        """
        for index in range(max(start_from, 0), len(self._tracks)):
            if not self._tracks[index].is_played:
                return index

        for track in self._tracks:
            track.is_played = track.is_skipped

        logger.debug(f"Play cycle exhausted over {len(self._tracks)} tracks")
        return None

    def reorder(
        self, policy: SequencingPolicy, rng: random.Random | None = None
    ) -> None:
        """Reorder the queue in place. Flags stay with their records."""
        sequencer.reorder(self._tracks, policy, rng)
