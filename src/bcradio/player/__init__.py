"""Player package for sequencing the queue and driving playback."""

from bcradio.player.models import PlaybackPhase, ProgressState, SequencingPolicy
from bcradio.player.protocols import AudioSink, PlaybackError, SessionOutput
from bcradio.player.session import PlaybackSession
from bcradio.player.tracklist import TrackListStore

__all__ = [
    "AudioSink",
    "PlaybackError",
    "PlaybackPhase",
    "PlaybackSession",
    "ProgressState",
    "SequencingPolicy",
    "SessionOutput",
    "TrackListStore",
]
