"""Mock implementation of CatalogClient for testing."""

import threading

from bcradio.catalog.models import CatalogError, CatalogPage


class MockCatalogClient:
    """Test double for CatalogClient.

    Serves a fixed first page per username and a queue of "load more" pages.
    Records every call. Fetches for usernames in `gated_usernames`, and "load
    more" fetches while `gate_more` is set, block until the test calls
    open_gate(); fetches run in a worker thread, so a threading.Event is used.
    """

    def __init__(
        self,
        pages: dict[str, CatalogPage | CatalogError] | None = None,
        more_pages: list[CatalogPage | CatalogError] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.more_pages = list(more_pages or [])
        self.collection_calls: list[tuple[str, str | None]] = []
        self.more_calls: list[tuple[int, str, int, str | None]] = []
        self.gated_usernames: set[str] = set()
        self.gate_more = False
        self._gate = threading.Event()

    def fetch_collection(
        self, username: str, identity_cookie: str | None = None
    ) -> CatalogPage:
        self.collection_calls.append((username, identity_cookie))
        if username in self.gated_usernames:
            self._gate.wait(timeout=5)

        page = self.pages.get(username)
        if isinstance(page, CatalogError):
            raise page
        if page is None:
            raise CatalogError(f"unknown user {username}")
        return page

    def fetch_more(
        self,
        fan_id: int,
        older_than_token: str,
        count: int,
        identity_cookie: str | None = None,
    ) -> CatalogPage:
        self.more_calls.append((fan_id, older_than_token, count, identity_cookie))
        if self.gate_more:
            self._gate.wait(timeout=5)
        if not self.more_pages:
            raise CatalogError("no more pages configured")

        page = self.more_pages.pop(0)
        if isinstance(page, CatalogError):
            raise page
        return page

    def open_gate(self) -> None:
        """Test helper: let gated fetches return."""
        self._gate.set()
