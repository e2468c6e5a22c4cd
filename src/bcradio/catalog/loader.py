"""CollectionLoader for building a queue from paginated collection data."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bcradio.catalog.client import CatalogClient
from bcradio.catalog.models import CatalogError, CollectionStats
from bcradio.catalog.normalizer import CatalogNormalizer
from bcradio.config import constants
from bcradio.player.tracklist import TrackListStore
from bcradio.track import AlbumSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadRequest:
    """Parameters of one full load, tagged with the generation it started in."""

    username: str
    history: int
    identity_cookie: str | None
    playlist_filter: frozenset[str] | None
    generation: int


class CollectionLoader:
    """Loads a fan's collection into a fresh TrackListStore.

    Every call to `load()` starts a new generation. Pages that arrive for an
    older generation are discarded instead of being appended, since in-flight
    requests are never cancelled.
    """

    def __init__(self, client: CatalogClient) -> None:
        self._client = client
        self._generation = 0
        # Generation whose first page the current store was built from
        self._store_generation = 0
        self._more_lock = asyncio.Lock()
        self.request: LoadRequest | None = None
        self.store = TrackListStore()
        self.normalizer = CatalogNormalizer()
        self.fan_id: int | None = None
        self.fan_name: str | None = None
        self.authenticated = False
        self.last_token: str | None = None
        self.more_available = False
        self.stats: CollectionStats | None = None

    @property
    def albums(self) -> list[AlbumSummary]:
        return list(self.normalizer.albums.values())

    def is_current(self, request: LoadRequest) -> bool:
        return request.generation == self._generation

    async def load(
        self,
        username: str,
        history: int = constants.DEFAULT_HISTORY,
        identity_cookie: str | None = None,
        playlist_filter: Iterable[str] | None = None,
        skipped_albums: Iterable[str] = (),
        favorite_albums: Iterable[str] = (),
    ) -> TrackListStore | None:
        """Fetch a collection and build a new queue from it.

        Only the first page is fetched here. `history` is remembered as the
        default batch size for `load_more()`.

        Args:
            username: Bandcamp username of the fan.
            history: Default number of items each `load_more()` requests.
            identity_cookie: Optional identity cookie.
            playlist_filter: Album ids to keep, from a published playlist.
            skipped_albums: Listener's permanently skipped album ids.
            favorite_albums: Listener's favorite album ids.

        Returns:
            The new store, or None if a newer load superseded this one.

        Raises:
            CatalogError: If the fetch fails or returns malformed data. Failures
                of a load that was already superseded are not raised.
        """
        self._generation += 1
        request = LoadRequest(
            username=username,
            history=history,
            identity_cookie=identity_cookie,
            playlist_filter=(
                frozenset(playlist_filter) if playlist_filter is not None else None
            ),
            generation=self._generation,
        )
        self.request = request

        try:
            page = await asyncio.to_thread(
                self._client.fetch_collection, username, identity_cookie
            )
        except CatalogError as e:
            if not self.is_current(request):
                logger.info(f"Ignoring failed stale load for {username}: {e}")
                return None
            raise
        if not self.is_current(request):
            logger.info(f"Discarding stale collection page for {username}")
            return None

        self.store = TrackListStore(skipped_albums, favorite_albums)
        self._store_generation = request.generation
        self.normalizer = CatalogNormalizer(request.playlist_filter)
        self.fan_id = page.fan_id
        self.fan_name = page.fan_name
        self.authenticated = page.authenticated
        self.last_token = page.last_token
        self.more_available = page.more_available
        self.stats = CollectionStats(
            total=page.item_count or len(page.tracklists),
            loaded=len(page.tracklists),
        )

        added = self.store.extend(self.normalizer.normalize(page))
        logger.info(
            f"Loaded {added} tracks from {len(self.normalizer.albums)} albums "
            f"for {username}"
        )

        return self.store

    async def load_more(self, count: int | None = None) -> int:
        """Append the next batch of collection items to the current store.

        Args:
            count: Number of items to request. Defaults to the load's history.

        Returns:
            Number of records appended. 0 if there is nothing more to load or
            the result belonged to a superseded load.
        """
        async with self._more_lock:
            request = self.request
            if (
                request is None
                or request.generation != self._store_generation
                or self.fan_id is None
                or not self.more_available
            ):
                return 0

            count = request.history if count is None else count
            if count <= 0 or not self.last_token:
                return 0

            logger.info(f"Loading {count} more items for fan {self.fan_id}")
            try:
                page = await asyncio.to_thread(
                    self._client.fetch_more,
                    self.fan_id,
                    self.last_token,
                    count,
                    request.identity_cookie,
                )
            except CatalogError as e:
                if not self.is_current(request):
                    logger.info(
                        f"Ignoring failed stale load for {request.username}: {e}"
                    )
                    return 0
                raise
            if not self.is_current(request):
                logger.info(
                    f"Discarding stale collection items for {request.username}"
                )
                return 0

            self.last_token = page.last_token
            self.more_available = page.more_available and bool(page.last_token)
            if self.stats is not None:
                self.stats.loaded += len(page.tracklists)

            return self.store.extend(self.normalizer.normalize(page))
