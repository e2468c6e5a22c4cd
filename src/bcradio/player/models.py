"""Data models for playback sessions."""

from dataclasses import dataclass
from enum import Enum, auto


class PlaybackPhase(Enum):
    """Represents the current phase of a playback session."""

    IDLE = auto()  # Nothing loaded, or the last load failed
    LOADING = auto()  # Source handed to the sink, waiting for it to start
    PLAYING = auto()  # Sink is producing audio
    PAUSED = auto()  # Source loaded, playback held
    ENDED = auto()  # Sink finished the track, choosing the next one


class SequencingPolicy(str, Enum):
    """How the queue is ordered."""

    SHUFFLE = "shuffle"
    ALPHABETIC = "alphabetic"
    RECENT = "recent"


@dataclass
class ProgressState:
    """Time reported by the sink for the loaded track, in seconds."""

    current_time: float = 0.0
    duration: float = 0.0

    def reset(self) -> None:
        self.current_time = 0.0
        self.duration = 0.0
