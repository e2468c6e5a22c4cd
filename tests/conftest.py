"""Shared test fixtures and utilities."""

import logging
import random

import pytest

from bcradio.catalog.models import CatalogPage, ItemInfo, RawTrack
from bcradio.config.settings import RadioSettings
from bcradio.persistent_state import PersistentState
from bcradio.player.models import SequencingPolicy
from bcradio.player.tracklist import TrackListStore
from bcradio.track import TrackRecord
from tests.mocks.mock_catalog import MockCatalogClient
from tests.mocks.mock_output import MockSessionOutput
from tests.mocks.mock_sink import MockAudioSink


@pytest.fixture
def settings(tmp_path) -> RadioSettings:
    """RadioSettings writing state under a temporary directory."""
    return RadioSettings(
        data_dir=tmp_path,
        playlists_file=tmp_path / "playlists.json",
        listener_state_file=tmp_path / "state" / "listener_state.json",
        listener_id="test-browser",
        identity_cookie=None,
        history=0,  # Only the first page unless a test asks for more
        request_timeout=None,
        sequencing=SequencingPolicy.RECENT,  # Deterministic order for tests
        log_level=logging.INFO,
    )


@pytest.fixture
def mock_sink() -> MockAudioSink:
    """Fresh MockAudioSink instance (loads complete immediately)."""
    return MockAudioSink()


@pytest.fixture
def mock_sink_held() -> MockAudioSink:
    """MockAudioSink whose loads wait for release_loads()."""
    return MockAudioSink(hold_loads=True)


@pytest.fixture
def mock_output() -> MockSessionOutput:
    """Fresh MockSessionOutput instance."""
    return MockSessionOutput()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def listener_state(tmp_path) -> PersistentState:
    return PersistentState(tmp_path / "state" / "listener_state.json")


@pytest.fixture
def playlist_state(tmp_path) -> PersistentState:
    return PersistentState(tmp_path / "playlists.json")


def make_track(
    title: str,
    album_id: str = "A",
    artist: str = "Artist",
    recency_rank: int = 0,
) -> TrackRecord:
    """Helper to create test TrackRecord instances."""
    return TrackRecord(
        artist=artist,
        title=title,
        stream_url=f"https://t4.bcbits.com/stream/{album_id}/{title}.mp3",
        album_id=album_id,
        artwork_id=f"art-{album_id}",
        album_page_url=f"https://artist.bandcamp.com/album/{album_id}",
        recency_rank=recency_rank,
    )


def make_store(*tracks: TrackRecord, **seeds) -> TrackListStore:
    """Helper to create a TrackListStore holding the given tracks."""
    store = TrackListStore(**seeds)
    store.extend(tracks)
    return store


def make_page(
    albums: dict[str, list[tuple[str, str, dict[str, str]]]],
    with_item_info: bool = True,
    **kwargs,
) -> CatalogPage:
    """Helper to build a CatalogPage.

    Args:
        albums: album id -> list of (artist, title, files) raw tracks.
        with_item_info: Whether to include item info for every album.
        **kwargs: Extra CatalogPage fields (last_token, fan_id, ...).
    """
    item_infos = {}
    if with_item_info:
        item_infos = {
            album_id: ItemInfo(
                art_id=f"art-{album_id}",
                item_url=f"https://artist.bandcamp.com/album/{album_id}",
            )
            for album_id in albums
        }
    tracklists = {
        album_id: [
            RawTrack(artist=artist, title=title, files=files)
            for artist, title, files in raw_tracks
        ]
        for album_id, raw_tracks in albums.items()
    }
    return CatalogPage(item_infos=item_infos, tracklists=tracklists, **kwargs)


def mp3(name: str) -> dict[str, str]:
    """Helper for a raw track file map with both encodings."""
    return {
        "mp3-v0": f"https://t4.bcbits.com/v0/{name}",
        "mp3-128": f"https://t4.bcbits.com/128/{name}",
    }


@pytest.fixture
def sample_tracks() -> list[TrackRecord]:
    """Two tracks of album A followed by one track of album B."""
    return [
        make_track("a1", album_id="A", recency_rank=0),
        make_track("a2", album_id="A", recency_rank=1),
        make_track("b1", album_id="B", artist="Band", recency_rank=0),
    ]


@pytest.fixture
def sample_store(sample_tracks) -> TrackListStore:
    return make_store(*sample_tracks)


@pytest.fixture
def first_page() -> CatalogPage:
    """Initial collection page with two albums and more items available."""
    return make_page(
        {
            "100": [
                ("Alpha", "Opening", mp3("100-1")),
                ("Alpha", "Closing", mp3("100-2")),
            ],
            "200": [("Beta", "Single", mp3("200-1"))],
        },
        last_token="1700000000:200:a::",
        more_available=True,
        item_count=3,
        fan_id=42,
        fan_name="Listener",
    )


@pytest.fixture
def more_page() -> CatalogPage:
    """A "load more" page with one further album and nothing after it."""
    return make_page(
        {"300": [("Gamma", "Later", mp3("300-1"))]},
        last_token=None,
        more_available=False,
    )


@pytest.fixture
def mock_client(first_page, more_page) -> MockCatalogClient:
    return MockCatalogClient(pages={"fan": first_page}, more_pages=[more_page])
