"""Folder crawler.

Fetches every remaining page of one folder, turns the listing into
checked child nodes, and schedules a crawl for each new child folder.
"""

import functools
import logging
from typing import Any, Dict, List, Optional

from ...config import CompletionConfig, NodeStatus
from ...errors import PartialTreeError, ProviderListingError
from .node import FileNode, FolderNode
from .provider import RemoteItem, fetch_page
from .scheduler import CrawlScheduler
from .tree import PartialTree

logger = logging.getLogger(__name__)


class FolderCrawler:
    """Crawl folders into a shared working tree.

    Each crawl only touches its own folder's pagination fields and only
    inserts nodes parented to that folder, so any number of crawls can
    share one tree.
    """

    def __init__(
        self,
        tree: PartialTree,
        provider: Any,
        scheduler: CrawlScheduler,
        config: Optional[CompletionConfig] = None,
    ):
        self.tree = tree
        self.provider = provider
        self.scheduler = scheduler
        self.config = config or CompletionConfig()
        self.stats: Dict[str, int] = {
            'folders_crawled': 0,
            'pages_fetched': 0,
            'nodes_discovered': 0,
        }

    def schedule(self, folder: FolderNode) -> None:
        """Submit a crawl of ``folder`` to the scheduler."""
        self.scheduler.submit(functools.partial(self.crawl, folder))

    async def crawl(self, folder: FolderNode) -> None:
        """Fetch all remaining pages of ``folder`` and merge the results.

        Pages are fetched one after another, never concurrently, since
        each cursor comes from the previous page.

        Raises:
            ProviderListingError: If a provider call fails
            DuplicateNodeError: If a listed identity is already in the tree
        """
        if folder.cached:
            cursor = folder.next_page_path
            if cursor is None:
                logger.debug("Folder '%s' already fully fetched", folder.id)
                return
        else:
            cursor = folder.id

        items: List[RemoteItem] = []
        while cursor:
            try:
                page = await fetch_page(self.provider, cursor, self.config.list_options)
            except PartialTreeError:
                raise
            except Exception as e:
                raise ProviderListingError(folder.id, cursor, str(e)) from e

            self.stats['pages_fetched'] += 1
            logger.debug(
                "Fetched page of '%s' at '%s': %d items, next=%r",
                folder.id, cursor, len(page.items), page.next_page_path,
            )
            items.extend(page.items)
            cursor = page.next_page_path

        files = [
            FileNode(
                id=item.request_path,
                parent_id=folder.id,
                status=NodeStatus.CHECKED,
                data=item.data,
            )
            for item in items if not item.is_folder
        ]
        folders = [
            FolderNode(
                id=item.request_path,
                parent_id=folder.id,
                status=NodeStatus.CHECKED,
                cached=False,
                next_page_path=None,
                data=item.data,
            )
            for item in items if item.is_folder
        ]

        self.tree.extend(files + folders)
        folder.mark_exhausted()
        self.stats['folders_crawled'] += 1
        self.stats['nodes_discovered'] += len(files) + len(folders)

        for new_folder in folders:
            self.schedule(new_folder)
