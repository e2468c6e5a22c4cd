"""HTTP client for a fan's Bandcamp collection."""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from bcradio.catalog.models import (
    CatalogFetchError,
    CatalogPage,
    ItemInfo,
    MalformedPayloadError,
    RawTrack,
)
from bcradio.config import constants

logger = logging.getLogger(__name__)


def album_id_from_key(key: str) -> str:
    """Tracklist keys are the item id with a one-letter type prefix ("a123")."""
    return key[1:]


def parse_item_infos(items: Iterable[Mapping[str, Any]]) -> dict[str, ItemInfo]:
    infos: dict[str, ItemInfo] = {}
    for item in items:
        item_id = item.get("item_id")
        if not item_id:
            continue
        art_id = item.get("item_art_id")
        infos[str(item_id)] = ItemInfo(
            art_id=str(art_id) if art_id else None,
            item_url=item.get("item_url") or "",
        )
    return infos


def parse_tracklists(
    tracklists: Mapping[str, Iterable[Mapping[str, Any]]],
) -> dict[str, list[RawTrack]]:
    parsed: dict[str, list[RawTrack]] = {}
    for key, songs in tracklists.items():
        parsed[album_id_from_key(key)] = [
            RawTrack(
                artist=song.get("artist") or "",
                title=song.get("title") or "",
                files={
                    encoding: url
                    for encoding, url in (song.get("file") or {}).items()
                    if isinstance(url, str)
                },
            )
            for song in songs
        ]
    return parsed


def parse_collection_html(html: str) -> CatalogPage:
    """Extract the initial collection page from a fan's profile HTML.

    Raises:
        MalformedPayloadError: If the page data blob is missing or unreadable.
    """
    soup = BeautifulSoup(html, "html.parser")
    pagedata = soup.find(id=constants.PAGEDATA_ELEMENT_ID)
    data_blob = pagedata.get("data-blob") if pagedata is not None else None
    if not data_blob:
        raise MalformedPayloadError("No collection data found in profile page")

    try:
        data = json.loads(data_blob)
        collection_data = data.get("collection_data") or {}
        identities = data.get("identities") or {}
        return CatalogPage(
            item_infos=parse_item_infos(data["item_cache"]["collection"].values()),
            tracklists=parse_tracklists(data["tracklists"]["collection"]),
            last_token=collection_data.get("last_token"),
            more_available=bool(collection_data.get("last_token")),
            item_count=collection_data.get("item_count"),
            fan_id=data["fan_data"]["fan_id"],
            fan_name=data["fan_data"].get("name"),
            authenticated=bool(identities.get("fan")),
        )
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise MalformedPayloadError(f"Unreadable collection data: {e}") from e


def parse_more_data(data: Mapping[str, Any]) -> CatalogPage:
    """Read a "load more" response body.

    Raises:
        MalformedPayloadError: If items or tracklists are missing.
    """
    try:
        return CatalogPage(
            item_infos=parse_item_infos(data["items"]),
            tracklists=parse_tracklists(data["tracklists"]),
            last_token=data.get("last_token"),
            more_available=bool(data.get("more_available")),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise MalformedPayloadError(f"Unreadable collection items: {e}") from e


class CatalogClient:
    """Fetches collection pages from Bandcamp.

    Calls are blocking; async callers run them with `asyncio.to_thread`.
    """

    def __init__(
        self,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """
        Args:
            timeout: Request timeout in seconds. None leaves it to the transport.
            session: Session to send requests with, mainly for tests.
        """
        self.timeout = timeout
        self._session = session or requests.Session()

    @staticmethod
    def _headers(identity_cookie: str | None) -> dict[str, str]:
        headers = {}
        if identity_cookie:
            headers["Cookie"] = (
                f"{constants.IDENTITY_COOKIE_NAME}={quote(identity_cookie, safe='')}"
            )
        return headers

    def fetch_collection(
        self, username: str, identity_cookie: str | None = None
    ) -> CatalogPage:
        """Fetch the first page of a fan's collection from their profile.

        Args:
            username: Bandcamp username of the fan.
            identity_cookie: Optional identity cookie, to include private items.

        Returns:
            The initial page, including fan id and continuation token.

        Raises:
            CatalogFetchError: On network failure or a non-success response.
            MalformedPayloadError: If the profile does not contain collection data.
        """
        url = f"{constants.BANDCAMP_BASE_URL}/{quote(username)}"
        try:
            response = self._session.get(
                url, headers=self._headers(identity_cookie), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise CatalogFetchError(f"Failed to fetch user data: {e}") from e

        if not response.ok:
            raise CatalogFetchError(
                f"Failed to fetch user data for {username} ({response.status_code})",
                response.status_code,
            )

        page = parse_collection_html(response.text)
        logger.info(
            f"Fetched collection of {page.fan_name or username}: "
            f"{len(page.tracklists)} tracklists, {page.item_count} items total, "
            f"{'authenticated' if page.authenticated else 'not authenticated'}"
        )
        return page

    def fetch_more(
        self,
        fan_id: int,
        older_than_token: str,
        count: int,
        identity_cookie: str | None = None,
    ) -> CatalogPage:
        """Fetch the next batch of collection items.

        Args:
            fan_id: Fan id from the initial page.
            older_than_token: Continuation token from the previous page.
            count: Number of items to request.
            identity_cookie: Optional identity cookie.

        Returns:
            A page without fan summary fields.

        Raises:
            CatalogFetchError: On network failure or a non-success response.
            MalformedPayloadError: If the response is not the expected JSON.
        """
        body = {
            "fan_id": int(fan_id),
            "older_than_token": older_than_token,
            "count": int(count),
        }
        try:
            response = self._session.post(
                constants.COLLECTION_ITEMS_URL,
                json=body,
                headers=self._headers(identity_cookie),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CatalogFetchError(f"Failed to fetch more data: {e}") from e

        if not response.ok:
            raise CatalogFetchError(
                f"Failed to fetch more data ({response.status_code})",
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedPayloadError(f"Collection items are not JSON: {e}") from e

        page = parse_more_data(data)
        logger.info(
            f"Fetched {len(page.item_infos)} more items, "
            f"{len(page.tracklists)} tracklists"
        )
        return page
