"""Test fixtures for partialtreelib consumers.

FakeListingProvider stands in for a real remote so that completion runs
can be tested without a network. It serves pre-built pages, records
every call, and can be told to fail or to be slow.
"""

import asyncio
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..aio.core.provider import ListingPage, ListingProvider, RemoteItem


def folder_item(request_path: str, name: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Build a provider mapping for a folder entry."""
    return {
        'requestPath': request_path,
        'isFolder': True,
        'name': name if name is not None else request_path.rstrip('/').rsplit('/', 1)[-1],
        **extra,
    }


def file_item(request_path: str, name: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Build a provider mapping for a file entry."""
    return {
        'requestPath': request_path,
        'isFolder': False,
        'name': name if name is not None else request_path.rsplit('/', 1)[-1],
        **extra,
    }


class FakeListingProvider(ListingProvider):
    """In-memory paginated remote.

    Example:
        provider = FakeListingProvider.from_listing({
            '/docs': [[file_item('/docs/a.txt')], [folder_item('/docs/img')]],
            '/docs/img': [[file_item('/docs/img/b.png')]],
        })

    Page N (N >= 2) of folder ``path`` is served at cursor
    ``"<path>?page=N"``. Unknown paths list as one empty page.
    """

    def __init__(
        self,
        pages: Optional[Mapping[str, Tuple[Sequence[Any], Optional[str]]]] = None,
        *,
        delay: float = 0.0,
        fail_on: Iterable[str] = (),
        error: Optional[Exception] = None
    ):
        """Initialize the provider.

        Args:
            pages: Mapping of cursor to (items, next cursor)
            delay: Seconds to sleep inside every call
            fail_on: Cursors whose call raises ``error``
            error: Exception to raise (ConnectionError by default)
        """
        self.pages: Dict[str, Tuple[Sequence[Any], Optional[str]]] = dict(pages or {})
        self.delay = delay
        self.fail_on = set(fail_on)
        self.error = error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.active = 0
        self.max_active = 0

    @classmethod
    def from_listing(
        cls,
        listing: Mapping[str, Sequence[Sequence[Any]]],
        **kwargs: Any
    ) -> 'FakeListingProvider':
        """Build a provider from ``{folder_path: [page_items, ...]}``."""
        pages: Dict[str, Tuple[Sequence[Any], Optional[str]]] = {}
        for path, folder_pages in listing.items():
            count = len(folder_pages)
            for index, items in enumerate(folder_pages):
                cursor = path if index == 0 else cls.page_cursor(path, index + 1)
                next_cursor = cls.page_cursor(path, index + 2) if index + 1 < count else None
                pages[cursor] = (list(items), next_cursor)
        return cls(pages, **kwargs)

    @staticmethod
    def page_cursor(path: str, page: int) -> str:
        return f"{path}?page={page}"

    @property
    def requested_paths(self) -> List[str]:
        return [path for path, _ in self.calls]

    async def list(self, path: str, options: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((path, options))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)

            if path in self.fail_on:
                raise self.error or ConnectionError(f"listing {path} failed")

            items, next_cursor = self.pages.get(path, ([], None))
            return {
                'items': [
                    item if isinstance(item, RemoteItem) else dict(item)
                    for item in items
                ],
                'nextPagePath': next_cursor,
            }
        finally:
            self.active -= 1


class SyncFakeListingProvider:
    """Synchronous variant serving the same pages, for duck-typed providers."""

    def __init__(
        self,
        pages: Mapping[str, Tuple[Sequence[Any], Optional[str]]],
        *,
        delay: float = 0.0
    ):
        """Initialize the provider.

        Args:
            pages: Mapping of cursor to (items, next cursor)
            delay: Seconds to block inside every call, like a blocking HTTP client
        """
        self.pages = dict(pages)
        self.delay = delay
        self.calls: List[str] = []

    def list(self, path: str, options: Dict[str, Any]) -> ListingPage:
        self.calls.append(path)
        if self.delay:
            time.sleep(self.delay)
        items, next_cursor = self.pages.get(path, ([], None))
        return ListingPage(
            items=[
                item if isinstance(item, RemoteItem) else RemoteItem.from_mapping(item)
                for item in items
            ],
            next_page_path=next_cursor,
        )
