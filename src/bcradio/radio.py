"""Radio - wires the catalog, listener state and playback session together."""

import logging
import random

from bcradio.catalog import CatalogClient, CatalogError, CollectionLoader
from bcradio.config.settings import RadioSettings
from bcradio.listener_preferences import ListenerPreferences
from bcradio.persistent_state import PersistentState
from bcradio.player import (
    AudioSink,
    PlaybackSession,
    SequencingPolicy,
    SessionOutput,
    TrackListStore,
)
from bcradio.playlists import PlaylistStore, PublishedPlaylist, encode_selection
from bcradio.track import AlbumSummary, TrackRecord

logger = logging.getLogger(__name__)


class Radio:
    """A listener's radio station over one fan's collection.

    A new PlaybackSession is created for every `start()`; the previous one is
    closed so that only the newest session commands the sink.
    """

    def __init__(
        self,
        settings: RadioSettings,
        sink: AudioSink,
        output: SessionOutput,
        client: CatalogClient | None = None,
        listener_state: PersistentState | None = None,
        playlist_state: PersistentState | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings
        self.sink = sink
        self.output = output
        self.loader = CollectionLoader(
            client or CatalogClient(timeout=settings.request_timeout)
        )
        self.preferences = ListenerPreferences(
            settings.listener_id,
            listener_state or PersistentState(settings.listener_state_file),
        )
        self.playlists = PlaylistStore(
            playlist_state or PersistentState(settings.playlists_file)
        )
        self.session: PlaybackSession | None = None
        self.username: str | None = None
        self.playlist: PublishedPlaylist | None = None
        self._rng = rng

    @property
    def store(self) -> TrackListStore:
        return self.loader.store

    @property
    def albums(self) -> list[AlbumSummary]:
        return self.loader.albums

    @property
    def current_track(self) -> TrackRecord | None:
        if self.session is None:
            return None
        return self.session.current_track

    @property
    def title(self) -> str:
        if self.playlist is not None:
            return self.playlist.playlist_name
        return f"{self.loader.fan_name or self.username}'s collection"

    async def start(
        self,
        username: str,
        history: int | None = None,
        identity_cookie: str | None = None,
        playlist: PublishedPlaylist | None = None,
        policy: SequencingPolicy | None = None,
        autoplay: bool = True,
    ) -> bool:
        """Load a collection and start a fresh session over it.

        Args:
            username: Bandcamp username of the fan.
            history: Items to load after the first page. Defaults to settings.
            identity_cookie: Identity cookie. Defaults to settings.
            playlist: Published playlist restricting which albums are queued.
            policy: Initial sequencing. Defaults to settings.
            autoplay: Start the first unplayed track once loaded.

        Returns:
            True if the session was started, False if loading failed or a
            newer `start()` superseded this one.
        """
        history = self.settings.history if history is None else history
        identity_cookie = identity_cookie or self.settings.identity_cookie
        policy = policy or self.settings.sequencing

        try:
            store = await self.loader.load(
                username,
                history=history,
                identity_cookie=identity_cookie,
                playlist_filter=playlist.filter_items if playlist else None,
                skipped_albums=self.preferences.get_skipped_albums(),
                favorite_albums=self.preferences.get_favorite_albums(),
            )
        except CatalogError as e:
            logger.error(f"Failed to load collection for {username}: {e}")
            self.output.report_error(f"Failed to load collection for {username}: {e}")
            return False

        if store is None:
            return False
        request = self.loader.request

        volume = 1.0
        if self.session is not None:
            volume = self.session.volume
            self.session.close()

        self.session = PlaybackSession(
            store, self.sink, self.output, policy=policy, rng=self._rng
        )
        self.session.set_volume(volume)
        self.username = username
        self.playlist = playlist

        if history > 0:
            await self.load_more(history)

        if request is None or not self.loader.is_current(request):
            return False

        logger.info(
            f"Starting {self.title}: {len(store)} tracks, sequenced by {policy.value}"
        )
        await self.session.resequence(autoplay=autoplay)
        return True

    async def start_playlist(
        self, username: str, playlist_name: str, autoplay: bool = True
    ) -> bool:
        """Start a session over one of a user's published playlists."""
        playlist = self.playlists.get(username, playlist_name)
        if playlist is None:
            self.output.report_error(
                f"No playlist named {playlist_name!r} for {username}"
            )
            return False

        return await self.start(
            username,
            history=playlist.history,
            playlist=playlist,
            autoplay=autoplay,
        )

    async def load_more(self, count: int | None = None) -> int:
        """Append another batch of the collection to the queue.

        Failures are reported; the tracks already queued stay playable.

        Returns:
            Number of tracks appended.
        """
        try:
            return await self.loader.load_more(count)
        except CatalogError as e:
            logger.error(f"Error loading more data: {e}")
            self.output.report_error(f"Error loading more data: {e}")
            return 0

    async def change_sequencing(self, policy: SequencingPolicy) -> None:
        """Reorder the queue with a new policy and play its first unplayed track."""
        if self.session is None:
            return
        await self.session.resequence(policy)

    def set_album_skipped(self, album_id: str, skipped: bool) -> None:
        """Skip or un-skip an album, in the queue and in the listener's state."""
        self.store.set_album_skipped(album_id, skipped)
        self.preferences.set_album_skipped(album_id, skipped)

    def set_album_favorite(self, album_id: str, favorite: bool) -> None:
        """Favorite or un-favorite an album, in the queue and in the listener's state."""
        self.store.set_album_favorite(album_id, favorite)
        self.preferences.set_album_favorite(album_id, favorite)

    async def toggle_skip_current(self) -> None:
        """Skip the current track's album permanently, or undo that skip.

        Skipping moves playback past the album straight away.
        """
        track = self.current_track
        if track is None or self.session is None:
            return

        if self.store.is_album_skipped(track.album_id):
            self.set_album_skipped(track.album_id, False)
            return

        self.set_album_skipped(track.album_id, True)
        await self.session.advance()

    def toggle_favorite_current(self) -> None:
        track = self.current_track
        if track is None:
            return
        self.set_album_favorite(
            track.album_id, not self.store.is_album_favorite(track.album_id)
        )

    def favorites(self) -> list[TrackRecord]:
        return self.store.favorites()

    def publish_favorites(
        self, playlist_name: str, history: int | None = None
    ) -> PublishedPlaylist:
        """Publish the listener's favorite albums as a playlist of the current user.

        Raises:
            ValueError: If no collection is loaded or there are no favorites.
            PlaylistLimitError: If the user has too many playlists already.
        """
        if self.username is None:
            raise ValueError("No collection loaded")

        album_ids = self.preferences.get_favorite_albums()
        if not album_ids:
            raise ValueError("No favorite albums to publish")

        history = self.settings.history if history is None else history
        return self.playlists.publish(
            self.username, playlist_name, history, encode_selection(album_ids)
        )

    def unpublish(self, playlist_name: str) -> bool:
        if self.username is None:
            return False
        return self.playlists.unpublish(self.username, playlist_name)
