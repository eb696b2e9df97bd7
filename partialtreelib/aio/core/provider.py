"""Provider listing interface.

A provider lists one page of a remote folder per call. The crawler
treats it as a black box: it asks for a page at a cursor, and a
non-empty cursor in the reply means more pages exist.
"""

import asyncio
import functools
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ...errors import MalformedListingError


@dataclass
class RemoteItem:
    """One entry of a remote listing.

    Attributes:
        request_path: Stable unique identity of the entry
        is_folder: Whether the entry can itself be listed
        data: Opaque provider metadata, copied onto the tree node
    """
    request_path: str
    is_folder: bool
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, item: Mapping[str, Any]) -> 'RemoteItem':
        """Build an item from a provider mapping.

        The mapping must carry ``requestPath``; ``isFolder`` defaults to
        False. The full mapping is kept as ``data``.
        """
        request_path = item.get('requestPath')
        if not request_path:
            raise MalformedListingError(
                f"Listing item has no requestPath: {item!r}", item
            )
        return cls(
            request_path=request_path,
            is_folder=bool(item.get('isFolder', False)),
            data=dict(item),
        )


@dataclass
class ListingPage:
    """One page of a folder listing."""
    items: List[RemoteItem] = field(default_factory=list)
    next_page_path: Optional[str] = None

    @classmethod
    def from_response(cls, response: Any) -> 'ListingPage':
        """Normalize a provider response into a ListingPage.

        Accepts a ListingPage as-is, or a mapping shaped like
        ``{"items": [...], "nextPagePath": ...}`` whose items are either
        RemoteItem instances or mappings. Empty cursors become None.

        Raises:
            MalformedListingError: If the response has no item list
        """
        if isinstance(response, ListingPage):
            page = cls(list(response.items), response.next_page_path)
        elif isinstance(response, Mapping):
            raw_items = response.get('items')
            if raw_items is None or isinstance(raw_items, (str, bytes, Mapping)):
                raise MalformedListingError(
                    "Listing response has no item list", response
                )
            items = [
                item if isinstance(item, RemoteItem) else RemoteItem.from_mapping(item)
                for item in raw_items
            ]
            page = cls(items, response.get('nextPagePath'))
        else:
            raise MalformedListingError(
                f"Unsupported listing response type: {type(response).__name__}",
                response,
            )

        if not page.next_page_path:
            page.next_page_path = None
        return page

    @property
    def has_more(self) -> bool:
        return self.next_page_path is not None


class ListingProvider(ABC):
    """Abstract base class for remote listing sources.

    Subclasses wrap a concrete transport (HTTP API, SDK, fixture data).
    Duck-typed objects with a compatible ``list`` method work as well;
    their ``list`` may be synchronous or a coroutine function.
    """

    @abstractmethod
    async def list(
        self, path: str, options: Dict[str, Any]
    ) -> Union[ListingPage, Mapping[str, Any]]:
        """Fetch one listing page.

        Args:
            path: Folder identity for the first page, or a cursor
            options: Request options, passed through untouched

        Returns:
            A ListingPage or a mapping accepted by ListingPage.from_response
        """
        pass

    async def close(self):
        """Release transport resources. Override if needed."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def fetch_page(provider: Any, path: str, options: Dict[str, Any]) -> ListingPage:
    """Call ``provider.list`` and normalize the result.

    Coroutine functions are awaited directly. Synchronous ``list`` methods
    run in a worker thread so a blocking transport does not stall other
    crawls on the event loop.
    """
    list_page = provider.list
    if inspect.iscoroutinefunction(list_page):
        result = await list_page(path, dict(options))
    elif hasattr(asyncio, "to_thread"):
        # Python 3.9+
        result = await asyncio.to_thread(list_page, path, dict(options))
    else:
        # Python 3.8 fallback
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, functools.partial(list_page, path, dict(options))
        )
    if inspect.isawaitable(result):
        result = await result
    return ListingPage.from_response(result)
