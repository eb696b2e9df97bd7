"""Execution planning for tree completion.

This module provides the TreeCompletionPlan class that runs one
completion: clone the input tree, crawl every poor folder to exhaustion,
then project the checked files into output records.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import CompletionConfig
from ..errors import InvalidConfigurationError
from .core import CrawlScheduler, FileNode, FolderCrawler, PartialTree
from .paths import absolute_path, join_path, relative_path

logger = logging.getLogger(__name__)

ABS_DIR_PATH_KEY = 'absDirPath'
REL_DIR_PATH_KEY = 'relDirPath'


class TreeCompletionPlan:
    """Orchestrates one or more tree completion runs.

    Every call to ``execute`` works on a private copy of the input tree
    and a fresh scheduler; nothing carries over between runs except the
    configuration. ``stats`` describes the most recent run.
    """

    def __init__(self, config: Optional[CompletionConfig] = None):
        """Initialize execution plan.

        Args:
            config: Completion configuration (defaults if None)

        Raises:
            InvalidConfigurationError: If the configuration is invalid
        """
        self.config = config or CompletionConfig()

        errors = self.config.validate()
        if errors:
            raise InvalidConfigurationError(errors)

        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'poor_folders': 0,
            'folders_crawled': 0,
            'pages_fetched': 0,
            'nodes_discovered': 0,
            'files_emitted': 0,
        }

    async def execute(self, tree: PartialTree, provider: Any) -> List[Dict[str, Any]]:
        """Complete ``tree`` against ``provider``.

        Args:
            tree: Input snapshot; never modified
            provider: Object with a ``list(path, options)`` method

        Returns:
            One record per checked file, in tree insertion order

        Raises:
            ProviderListingError: If any provider call fails
            TreeIntegrityError: If the tree is structurally broken; input
                links are checked before any provider call
        """
        self.stats = self._empty_stats()
        working_tree = tree.copy()
        working_tree.validate()

        scheduler = CrawlScheduler(self.config.concurrency)
        crawler = FolderCrawler(working_tree, provider, scheduler, self.config)

        poor_folders = working_tree.poor_folders()
        self.stats['poor_folders'] = len(poor_folders)
        logger.debug("Scheduling %d poor folders", len(poor_folders))
        for folder in poor_folders:
            crawler.schedule(folder)

        try:
            await scheduler.await_idle()
        finally:
            self.stats.update(crawler.stats)

        records = [self._to_record(working_tree, f) for f in working_tree.checked_files()]
        self.stats['files_emitted'] = len(records)

        logger.info(
            "Tree completion finished: %d folders crawled, %d pages, %d files",
            self.stats['folders_crawled'],
            self.stats['pages_fetched'],
            self.stats['files_emitted'],
        )
        return records

    def _to_record(self, tree: PartialTree, file: FileNode) -> Dict[str, Any]:
        abs_path = absolute_path(tree, file)
        rel_path = relative_path(abs_path)
        separator = self.config.path_separator
        name_key = self.config.name_key
        return {
            **file.data,
            ABS_DIR_PATH_KEY: join_path(abs_path, separator, name_key),
            REL_DIR_PATH_KEY: join_path(rel_path, separator, name_key),
        }

    def get_stats(self) -> Dict[str, int]:
        return dict(self.stats)
