"""Mock implementation of SessionOutput protocol for testing."""

from bcradio.track import TrackRecord


class MockSessionOutput:
    """Test double for SessionOutput protocol.

    Records all method calls as events for test verification.
    Events are tuples: ('method_name', *args)
    """

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def display_now_playing(self, track: TrackRecord | None) -> None:
        """Record now playing event with the track title (or None)."""
        self.events.append(
            ("display_now_playing", track.title if track is not None else None)
        )

    def update_progress(self, current_time: float, duration: float) -> None:
        self.events.append(("update_progress", current_time, duration))

    def report_error(self, message: str) -> None:
        self.events.append(("report_error", message))

    def report_nothing_to_play(self) -> None:
        self.events.append(("report_nothing_to_play",))

    def names(self) -> list[str]:
        """Test helper: just the method names, in call order."""
        return [event[0] for event in self.events]
