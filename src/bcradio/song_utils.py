import math

from bcradio.track import AlbumSummary, TrackRecord

# The maximum character length of any song title or artist name shown in a listing
MAXIMUM_SONG_METADATA_CHARACTERS = 100


# format an amount of seconds as m:ss, the way a player progress bar shows it
def format_time(seconds: float) -> str:
    if math.isnan(seconds) or seconds < 0:
        return "0:00"
    minutes = int(seconds // 60)
    return f"{minutes}:{int(seconds % 60):02d}"


def sanitize_tag(tag_value: str) -> str:
    """Sanitizes a tag value for display.

    Sanitizes by:
        * removing any newline characters.
        * capping to 100 characters total.

    Args:
        tag_value: The tag to sanitize (i.e. an artist or song name).

    Returns:
        The sanitized string.
    """
    tag_value = "".join(tag_value.splitlines())

    if len(tag_value) > MAXIMUM_SONG_METADATA_CHARACTERS:
        # Cap the length of the string and append an ellipsis
        tag_value = tag_value[: MAXIMUM_SONG_METADATA_CHARACTERS - 1] + "…"

    return tag_value


def song_format(track: TrackRecord) -> str:
    """Format a track as "Artist - Title", falling back to just the title."""
    title = sanitize_tag(track.title)
    if not track.artist:
        return title
    return f"{sanitize_tag(track.artist)} - {title}"


def track_line(index: int, track: TrackRecord) -> str:
    """One numbered queue entry, with markers for skipped and favorite albums."""
    markers = ""
    if track.is_skipped:
        markers += " [skipped]"
    if track.is_favorite:
        markers += " [favorite]"
    return f"{index + 1}. {song_format(track)}{markers}"


def album_line(album: AlbumSummary) -> str:
    return (
        f"{album.id}: {sanitize_tag(album.title)} "
        f"({album.track_count} tracks) {album.page_url}"
    )
