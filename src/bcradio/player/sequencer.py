"""Queue ordering policies.

Every policy reorders the given list in place. Records keep their identity, so
played/skipped/favorite flags travel with them.
"""

import logging
import random
import unicodedata

from bcradio.player.models import SequencingPolicy
from bcradio.track import TrackRecord

logger = logging.getLogger(__name__)


def collation_key(text: str) -> str:
    """Fold case and strip accents so that "Émile" sorts beside "emile"."""
    normalized = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in normalized if not unicodedata.combining(c))
    return stripped.casefold()


def alphabetic_key(track: TrackRecord) -> tuple[str, str]:
    return collation_key(track.artist), collation_key(track.title)


def shuffle(tracks: list[TrackRecord], rng: random.Random | None = None) -> None:
    """Fisher-Yates shuffle; every permutation is equally likely."""
    rng = rng or random
    for i in range(len(tracks) - 1, 0, -1):
        j = rng.randrange(i + 1)
        tracks[i], tracks[j] = tracks[j], tracks[i]


def reorder(
    tracks: list[TrackRecord],
    policy: SequencingPolicy,
    rng: random.Random | None = None,
) -> list[TrackRecord]:
    """Rearrange `tracks` in place according to `policy`.

    Args:
        tracks: The queue to reorder. May be empty.
        policy: Ordering to apply.
        rng: Random source for shuffling, mainly for tests.

    Returns:
        The same list object, reordered.
    """
    if policy == SequencingPolicy.SHUFFLE:
        shuffle(tracks, rng)
    elif policy == SequencingPolicy.ALPHABETIC:
        tracks.sort(key=alphabetic_key)
    elif policy == SequencingPolicy.RECENT:
        tracks.sort(key=lambda track: track.recency_rank)
    else:
        raise ValueError(f"Unknown sequencing policy: {policy}")

    logger.debug(f"Reordered {len(tracks)} tracks by {policy.value}")
    return tracks
