import asyncio
import logging
import sys

import click
import colorlog

from bcradio import song_utils
from bcradio.catalog import CatalogClient, CatalogError, CollectionLoader
from bcradio.config.settings import RadioSettings
from bcradio.config.validation import validate_and_setup_directories
from bcradio.listener_preferences import ListenerPreferences
from bcradio.persistent_state import PersistentState
from bcradio.player import SequencingPolicy
from bcradio.playlists import (
    PlaylistLimitError,
    PlaylistStore,
    encode_selection,
    format_listing,
)

logger = logging.getLogger(__name__)


def setup_logging(log_level: int) -> None:
    formatter = colorlog.ColoredFormatter(
        "%(cyan)s%(asctime)s%(reset)s %(log_color)s%(levelname)-8s%(reset)s %(light_purple)s%(name)s:%(reset)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "purple",
            "INFO": "blue",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.addHandler(handler)


async def load_collection(
    settings: RadioSettings,
    username: str,
    history: int,
    identity_cookie: str | None,
    playlist_filter: frozenset[str] | None = None,
) -> CollectionLoader:
    """Load a collection the same way a radio session does, without playing it."""
    preferences = ListenerPreferences(
        settings.listener_id, PersistentState(settings.listener_state_file)
    )
    loader = CollectionLoader(CatalogClient(timeout=settings.request_timeout))
    await loader.load(
        username,
        history=history,
        identity_cookie=identity_cookie,
        playlist_filter=playlist_filter,
        skipped_albums=preferences.get_skipped_albums(),
        favorite_albums=preferences.get_favorite_albums(),
    )
    if history > 0:
        await loader.load_more(history)
    return loader


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """bcradio - play a Bandcamp collection as a radio station."""
    settings = RadioSettings.from_environment()
    setup_logging(logging.DEBUG if verbose else settings.log_level)
    settings.validate(logger)

    errors = validate_and_setup_directories(settings)
    if errors:
        for error in errors:
            logger.error(error)
        ctx.exit(1)

    ctx.obj = settings


@cli.command()
@click.argument("username")
@click.option("--history", type=int, default=None, help="Extra items to load")
@click.option("--identity", default=None, help="Bandcamp identity cookie")
@click.option("--playlist", default=None, help="Published playlist to restrict to")
@click.option(
    "--sequencing",
    type=click.Choice([policy.value for policy in SequencingPolicy]),
    default=None,
    help="Queue order",
)
@click.option("--limit", type=int, default=20, show_default=True)
@click.pass_obj
def queue(settings, username, history, identity, playlist, sequencing, limit):
    """Show the play queue for USERNAME's collection."""
    playlist_filter = None
    if playlist:
        published = PlaylistStore(PersistentState(settings.playlists_file)).get(
            username, playlist
        )
        if published is None:
            raise click.ClickException(
                f"No playlist named {playlist!r} for {username}"
            )
        playlist_filter = published.filter_items
        if history is None:
            history = published.history

    history = settings.history if history is None else history
    policy = SequencingPolicy(sequencing) if sequencing else settings.sequencing

    try:
        loader = asyncio.run(
            load_collection(
                settings,
                username,
                history,
                identity or settings.identity_cookie,
                playlist_filter,
            )
        )
    except CatalogError as e:
        raise click.ClickException(str(e))

    loader.store.reorder(policy)
    next_index = loader.store.next_unplayed_index(0)

    click.echo(playlist or f"{loader.fan_name or username}'s collection")
    if loader.stats is not None:
        click.echo(
            f"{loader.stats.loaded}/{loader.stats.total} items loaded, "
            f"{len(loader.store)} tracks, sequenced by {policy.value}"
        )

    if next_index is None:
        click.echo("Nothing to play")
        return

    for index, track in enumerate(loader.store):
        if index >= limit:
            click.echo(f"... {len(loader.store) - limit} more")
            break
        marker = "▶ " if index == next_index else "  "
        click.echo(marker + song_utils.track_line(index, track))


@cli.command()
@click.argument("username")
@click.option("--history", type=int, default=None, help="Extra items to load")
@click.option("--identity", default=None, help="Bandcamp identity cookie")
@click.pass_obj
def albums(settings, username, history, identity):
    """List the albums in USERNAME's collection."""
    history = settings.history if history is None else history
    try:
        loader = asyncio.run(
            load_collection(
                settings, username, history, identity or settings.identity_cookie
            )
        )
    except CatalogError as e:
        raise click.ClickException(str(e))

    for album in loader.albums:
        click.echo(song_utils.album_line(album))


@cli.command()
@click.argument("username", required=False)
@click.pass_obj
def playlists(settings, username):
    """List published playlists, optionally only USERNAME's."""
    store = PlaylistStore(PersistentState(settings.playlists_file))
    listing = store.list_playlists(username)
    if not listing:
        click.echo("No playlists available")
        return
    click.echo(format_listing(listing).replace("\r\n", "\n"))


@cli.command()
@click.argument("username")
@click.argument("playlist_name")
@click.argument("album_ids", nargs=-1, required=True)
@click.option("--history", type=int, default=None, help="Items to load when played")
@click.pass_obj
def publish(settings, username, playlist_name, album_ids, history):
    """Publish ALBUM_IDS as PLAYLIST_NAME for USERNAME."""
    store = PlaylistStore(PersistentState(settings.playlists_file))
    history = settings.history if history is None else history
    try:
        store.publish(username, playlist_name, history, encode_selection(album_ids))
    except PlaylistLimitError as e:
        raise click.ClickException(str(e))
    click.echo("OK")


@cli.command()
@click.argument("username")
@click.argument("playlist_name")
@click.pass_obj
def unpublish(settings, username, playlist_name):
    """Delete USERNAME's playlist PLAYLIST_NAME."""
    store = PlaylistStore(PersistentState(settings.playlists_file))
    if not store.unpublish(username, playlist_name):
        raise click.ClickException(
            f"No playlist named {playlist_name!r} for {username}"
        )
    click.echo("OK")


@cli.command()
@click.argument("album_id")
@click.option("--undo", is_flag=True, help="Include the album again")
@click.pass_obj
def skip(settings, album_id, undo):
    """Permanently skip ALBUM_ID for this listener."""
    preferences = ListenerPreferences(
        settings.listener_id, PersistentState(settings.listener_state_file)
    )
    preferences.set_album_skipped(album_id, not undo)
    click.echo(f"{'Unskipped' if undo else 'Skipped'} album {album_id}")


@cli.command()
@click.argument("album_id")
@click.option("--undo", is_flag=True, help="Remove the album from favorites")
@click.pass_obj
def favorite(settings, album_id, undo):
    """Add ALBUM_ID to this listener's favorites."""
    preferences = ListenerPreferences(
        settings.listener_id, PersistentState(settings.listener_state_file)
    )
    preferences.set_album_favorite(album_id, not undo)
    click.echo(
        f"{'Removed' if undo else 'Added'} album {album_id} "
        f"{'from' if undo else 'to'} favorites"
    )


if __name__ == "__main__":
    cli()
