"""Protocol definitions for dependency injection in PlaybackSession."""

from typing import Protocol

from bcradio.track import TrackRecord


class PlaybackError(Exception):
    """Raised by an AudioSink when a source cannot be loaded or played."""


class AudioSink(Protocol):
    """Protocol for audio output.

    The session is the only component allowed to command the sink. Sink
    implementations report progress back by calling the session's
    `on_time_update`, `on_duration_change` and `on_ended` handlers.
    """

    async def load(self, url: str) -> None:
        """Replace the current source with the stream at `url`.

        Args:
            url: Playable stream URL.

        Raises:
            PlaybackError: If the source is rejected or cannot be decoded.
        """
        ...

    async def play(self) -> None:
        """Start or resume playback of the loaded source.

        Raises:
            PlaybackError: If the sink refuses to start playback.
        """
        ...

    def pause(self) -> None:
        """Hold playback. Safe to call when nothing is playing."""
        ...

    def seek(self, seconds: float) -> None:
        """Move the playback position of the loaded source."""
        ...

    def set_volume(self, level: float) -> None:
        """Set output volume, between 0.0 and 1.0 inclusive."""
        ...


class SessionOutput(Protocol):
    """Protocol for everything a listener sees during a session.

    Implementations render the now-playing record, a progress bar, and
    error or status notices.
    """

    def display_now_playing(self, track: TrackRecord | None) -> None:
        """Show the record now loaded in the sink.

        Args:
            track: The loaded record, or None when nothing is loaded.
        """
        ...

    def update_progress(self, current_time: float, duration: float) -> None:
        """Show the position within the loaded track, in seconds."""
        ...

    def report_error(self, message: str) -> None:
        """Show a non-fatal error, such as a failed fetch or load."""
        ...

    def report_nothing_to_play(self) -> None:
        """Tell the listener the queue has no eligible tracks."""
        ...
