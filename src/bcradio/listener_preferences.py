"""Listener preferences management."""

from bcradio.persistent_state import PersistentState


class ListenerPreferences:
    """Manages the skipped and favorite albums of one listener.

    This class provides a clean interface for querying preferences without
    exposing the underlying persistent state structure.
    """

    def __init__(self, listener_id: str, persistent_state: PersistentState):
        """Initialize preferences for a listener.

        Args:
            listener_id: Key of this listener (one per browser or device).
            persistent_state: The persistent state manager.
        """
        self.listener_id = listener_id
        self._persistent_state = persistent_state

    def _get_album_set(self, name: str) -> set[str]:
        value = self._persistent_state.get_state(["listeners", self.listener_id, name])
        if not isinstance(value, list):
            return set()
        return {str(album_id) for album_id in value}

    def _set_album_set(self, name: str, album_ids: set[str]) -> None:
        path = ["listeners", self.listener_id, name]
        if album_ids:
            self._persistent_state.set_state(path, sorted(album_ids))
        else:
            self._persistent_state.delete_state(path)

    def get_skipped_albums(self) -> set[str]:
        """Album ids this listener excluded permanently."""
        return self._get_album_set("skipped_albums")

    def get_favorite_albums(self) -> set[str]:
        """Album ids this listener marked as favorites."""
        return self._get_album_set("favorite_albums")

    def set_album_skipped(self, album_id: str, skipped: bool) -> None:
        """Add an album to, or remove it from, the skipped set.

        Args:
            album_id: The album to update.
            skipped: True to skip the album, False to include it again.
        """
        albums = self.get_skipped_albums()
        if skipped:
            albums.add(album_id)
        else:
            albums.discard(album_id)
        self._set_album_set("skipped_albums", albums)

    def set_album_favorite(self, album_id: str, favorite: bool) -> None:
        """Add an album to, or remove it from, the favorites set."""
        albums = self.get_favorite_albums()
        if favorite:
            albums.add(album_id)
        else:
            albums.discard(album_id)
        self._set_album_set("favorite_albums", albums)
