"""Mock implementation of AudioSink protocol for testing."""

import asyncio

from bcradio.player.protocols import PlaybackError


class MockAudioSink:
    """Test double for AudioSink protocol.

    Records every command and provides test control over load completion
    and failures.
    """

    def __init__(self, hold_loads: bool = False) -> None:
        """Initialize mock sink.

        Args:
            hold_loads: If True, load() waits until the test calls release_loads().
                        If False, load() completes immediately.
        """
        self.commands: list[tuple] = []
        self.loaded: list[str] = []
        self.volume = 1.0
        self.fail_urls: set[str] = set()
        self.fail_play = False
        self._hold_loads = hold_loads
        self._release = asyncio.Event()

    async def load(self, url: str) -> None:
        """Record the load, optionally wait, and fail for configured URLs."""
        self.commands.append(("load", url))
        self.loaded.append(url)

        if self._hold_loads:
            await self._release.wait()

        if url in self.fail_urls:
            raise PlaybackError(f"cannot decode {url}")

    async def play(self) -> None:
        self.commands.append(("play",))
        if self.fail_play:
            raise PlaybackError("play() request was rejected")

    def pause(self) -> None:
        self.commands.append(("pause",))

    def seek(self, seconds: float) -> None:
        self.commands.append(("seek", seconds))

    def set_volume(self, level: float) -> None:
        self.commands.append(("set_volume", level))
        self.volume = level

    def release_loads(self) -> None:
        """Test helper: let every held load() finish."""
        self._release.set()
