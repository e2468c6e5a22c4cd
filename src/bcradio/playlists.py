"""Published playlists, keyed by username and playlist name."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import quote, unquote

from bcradio.config import constants
from bcradio.persistent_state import PersistentState

logger = logging.getLogger(__name__)


class PlaylistLimitError(Exception):
    """A user already has the maximum number of published playlists."""


def encode_selection(album_ids: Iterable[str]) -> str:
    """Encode album ids as the URL-safe selection blob stored with a playlist."""
    return quote(constants.PLAYLIST_SELECTION_SEPARATOR.join(sorted(album_ids)), safe="")


def parse_selection(selection: str) -> frozenset[str]:
    """Decode a selection blob back into album ids."""
    return frozenset(
        album_id
        for album_id in unquote(selection).split(constants.PLAYLIST_SELECTION_SEPARATOR)
        if album_id
    )


@dataclass(frozen=True)
class PublishedPlaylist:
    """One published selection of albums from a user's collection."""

    username: str
    playlist_name: str
    history: int
    url: str

    @property
    def filter_items(self) -> frozenset[str]:
        return parse_selection(self.url)

    def to_line(self) -> str:
        return constants.PLAYLIST_FIELD_SEPARATOR.join(
            [self.username, self.playlist_name, str(self.history), self.url]
        )


def format_listing(playlists: Iterable[PublishedPlaylist]) -> str:
    """Render playlists as `username|name|history|url` lines joined by CRLF."""
    return constants.PLAYLIST_LINE_SEPARATOR.join(p.to_line() for p in playlists)


def parse_listing(text: str) -> list[PublishedPlaylist]:
    """Parse the output of `format_listing`. Blank and short lines are ignored."""
    playlists = []
    for line in text.split(constants.PLAYLIST_LINE_SEPARATOR):
        if not line:
            continue
        fields = line.split(constants.PLAYLIST_FIELD_SEPARATOR, 3)
        if len(fields) != 4:
            logger.warning(f"Ignoring malformed playlist line: {line!r}")
            continue
        username, playlist_name, history, url = fields
        try:
            history_value = int(history)
        except ValueError:
            logger.warning(f"Ignoring playlist line with bad history: {line!r}")
            continue
        playlists.append(PublishedPlaylist(username, playlist_name, history_value, url))
    return playlists


class PlaylistStore:
    """Stores published playlists in a JSON state file."""

    def __init__(self, persistent_state: PersistentState):
        self._persistent_state = persistent_state

    def _all_entries(self) -> dict:
        entries = self._persistent_state.get_state(["playlists"])
        return entries if isinstance(entries, dict) else {}

    def list_playlists(self, username: str | None = None) -> list[PublishedPlaylist]:
        """List published playlists, sorted by username then playlist name.

        Args:
            username: Only list this user's playlists. None lists everyone's.
        """
        playlists = []
        for user, user_playlists in self._all_entries().items():
            if username is not None and user != username:
                continue
            if not isinstance(user_playlists, dict):
                continue
            for playlist_name, entry in user_playlists.items():
                playlists.append(
                    PublishedPlaylist(
                        username=user,
                        playlist_name=playlist_name,
                        history=int(entry.get("history", 0)),
                        url=entry.get("url", ""),
                    )
                )

        playlists.sort(key=lambda p: (p.username, p.playlist_name))
        return playlists

    def get(self, username: str, playlist_name: str) -> PublishedPlaylist | None:
        entry = self._persistent_state.get_state(["playlists", username, playlist_name])
        if not isinstance(entry, dict):
            return None
        return PublishedPlaylist(
            username=username,
            playlist_name=playlist_name,
            history=int(entry.get("history", 0)),
            url=entry.get("url", ""),
        )

    def publish(
        self, username: str, playlist_name: str, history: int, url: str
    ) -> PublishedPlaylist:
        """Create or replace a user's playlist.

        Raises:
            PlaylistLimitError: If the playlist is new and the user already has
                the maximum number of playlists.
        """
        existing = self.list_playlists(username)
        is_replacement = any(p.playlist_name == playlist_name for p in existing)
        if (
            not is_replacement
            and len(existing) >= constants.MAXIMUM_PLAYLISTS_PER_USER
        ):
            raise PlaylistLimitError(
                f"Maximum {constants.MAXIMUM_PLAYLISTS_PER_USER} playlists per user"
            )

        self._persistent_state.set_state(
            ["playlists", username, playlist_name], {"history": history, "url": url}
        )
        logger.info(f"Published playlist {playlist_name!r} for {username}")
        return PublishedPlaylist(username, playlist_name, history, url)

    def unpublish(self, username: str, playlist_name: str) -> bool:
        """Delete a user's playlist.

        Returns:
            True if the playlist existed.
        """
        deleted = self._persistent_state.delete_state(
            ["playlists", username, playlist_name]
        )
        if deleted:
            logger.info(f"Unpublished playlist {playlist_name!r} for {username}")
        return deleted
