"""PlaybackSession for driving an audio sink through the queue."""

import logging
import math
import random

from bcradio.player.models import PlaybackPhase, ProgressState, SequencingPolicy
from bcradio.player.protocols import AudioSink, PlaybackError, SessionOutput
from bcradio.player.tracklist import TrackListStore
from bcradio.track import TrackRecord

logger = logging.getLogger(__name__)


class PlaybackSession:
    """Owns the audio sink and the current position in the queue.

    Transport intents (play, pause, next, ...) are translated into sink
    commands; sink events (time update, duration, ended) drive automatic
    advancement through the store's unplayed tracks.
    """

    def __init__(
        self,
        store: TrackListStore,
        sink: AudioSink,
        output: SessionOutput,
        policy: SequencingPolicy = SequencingPolicy.SHUFFLE,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.sink = sink
        self.output = output
        self.policy = policy
        self.phase = PlaybackPhase.IDLE
        self.current_index = 0
        self.current_track: TrackRecord | None = None
        self.progress = ProgressState()
        self.volume = 1.0
        self._rng = rng
        # Bumped on every load so a superseded load cannot change the phase
        self._load_generation = 0

    @property
    def is_playing(self) -> bool:
        """Check if currently in PLAYING phase."""
        return self.phase == PlaybackPhase.PLAYING

    async def play(self, index: int) -> None:
        """Load and start the record at `index`.

        Args:
            index: Queue position to play. Out-of-bounds indices are ignored.
        """
        if not self.store.in_bounds(index):
            if len(self.store) == 0:
                self._nothing_to_play()
            return

        self._load_generation += 1
        generation = self._load_generation

        track = self.store[index]
        self.current_index = index
        self.current_track = track
        self.progress.reset()
        self.phase = PlaybackPhase.LOADING
        self.output.display_now_playing(track)

        logger.info(
            f"Loading track {index + 1}/{len(self.store)}: {track.formatted_title}"
        )

        try:
            await self.sink.load(track.stream_url)
            if generation != self._load_generation:
                return
            await self.sink.play()
        except PlaybackError as e:
            if generation != self._load_generation:
                return
            self.phase = PlaybackPhase.IDLE
            logger.warning(f"Failed to play {track.stream_url}: {e}")
            self.output.report_error(f"Could not play {track.formatted_title}: {e}")
            return

        if generation != self._load_generation:
            return
        self.phase = PlaybackPhase.PLAYING

    def pause(self) -> None:
        """Hold playback. No-op unless playing.

        A pause requested while a track is still loading is not remembered;
        the track starts once the load completes.
        """
        if self.phase != PlaybackPhase.PLAYING:
            return
        self.sink.pause()
        self.phase = PlaybackPhase.PAUSED

    async def resume(self) -> None:
        """Continue a paused track. No-op unless paused."""
        if self.phase != PlaybackPhase.PAUSED:
            return

        try:
            await self.sink.play()
        except PlaybackError as e:
            self.phase = PlaybackPhase.IDLE
            logger.warning(f"Failed to resume playback: {e}")
            self.output.report_error(f"Could not resume playback: {e}")
            return

        self.phase = PlaybackPhase.PLAYING

    async def toggle_play_pause(self) -> None:
        """Pause when playing, resume when paused, otherwise start the current track."""
        if self.phase == PlaybackPhase.PLAYING:
            self.pause()
        elif self.phase == PlaybackPhase.PAUSED:
            await self.resume()
        elif self.phase == PlaybackPhase.LOADING:
            return
        elif len(self.store) == 0:
            self._nothing_to_play()
        elif self.store.in_bounds(self.current_index):
            await self.play(self.current_index)
        else:
            await self.play(0)

    async def next(self) -> None:
        """Manually skip to the following queue position, ignoring play state."""
        if self.store.in_bounds(self.current_index + 1):
            await self.play(self.current_index + 1)

    async def prev(self) -> None:
        """Manually go back one queue position."""
        if self.store.in_bounds(self.current_index - 1):
            await self.play(self.current_index - 1)

    async def replay(self) -> None:
        """Restart the current track from the beginning."""
        if self.store.in_bounds(self.current_index):
            await self.play(self.current_index)

    def seek(self, seconds: float) -> None:
        self.sink.seek(seconds)
        self.progress.current_time = seconds

    def set_volume(self, level: float) -> None:
        if math.isnan(level):
            return
        self.volume = min(max(level, 0.0), 1.0)
        self.sink.set_volume(self.volume)

    async def advance(self) -> None:
        """Mark the current track played and move to the next unplayed one.

        On exhaustion the queue is re-sequenced with the current policy and
        searched once more from the start.
        """
        self.store.mark_played(self.current_index)
        next_index = self.store.next_unplayed_index(self.current_index + 1)

        if next_index is None:
            logger.info(f"All tracks played, re-sequencing by {self.policy.value}")
            self.store.reorder(self.policy, self._rng)
            next_index = self.store.next_unplayed_index(0)

        if next_index is None:
            self._nothing_to_play()
            return

        await self.play(next_index)

    async def resequence(
        self, policy: SequencingPolicy | None = None, autoplay: bool = True
    ) -> None:
        """Reorder the queue and re-resolve the current position.

        Args:
            policy: New policy to remember and apply. Defaults to the last one used.
            autoplay: Start the first unplayed track. When False the session
                only points at it.
        """
        if policy is not None:
            self.policy = policy

        self.store.reorder(self.policy, self._rng)
        next_index = self.store.next_unplayed_index(0)

        if next_index is None:
            self._nothing_to_play()
            return

        if autoplay:
            await self.play(next_index)
        else:
            self.current_index = next_index

    def close(self) -> None:
        """Stop using the sink. Any load still in flight is discarded."""
        self._load_generation += 1
        if self.current_track is not None:
            self.sink.pause()
        self.phase = PlaybackPhase.IDLE

    def on_time_update(self, current_time: float) -> None:
        """Sink event: playback position changed."""
        if math.isnan(current_time) or self.phase != PlaybackPhase.PLAYING:
            return
        self.progress.current_time = current_time
        self.output.update_progress(current_time, self.progress.duration)

    def on_duration_change(self, duration: float) -> None:
        """Sink event: the loaded source's duration became known."""
        if math.isnan(duration) or duration <= 0:
            return
        if self.phase not in (
            PlaybackPhase.LOADING,
            PlaybackPhase.PLAYING,
            PlaybackPhase.PAUSED,
        ):
            return
        self.progress.duration = duration
        if self.phase == PlaybackPhase.PLAYING:
            self.output.update_progress(self.progress.current_time, duration)

    async def on_ended(self) -> None:
        """Sink event: the loaded source finished playing."""
        if self.phase != PlaybackPhase.PLAYING:
            return

        self.phase = PlaybackPhase.ENDED
        self.progress.current_time = 0.0
        await self.advance()

    def _nothing_to_play(self) -> None:
        self._load_generation += 1
        if self.current_track is not None:
            self.sink.pause()
            self.current_track = None
            self.output.display_now_playing(None)
        self.phase = PlaybackPhase.IDLE
        logger.info("Nothing to play")
        self.output.report_nothing_to_play()
