"""Asynchronous implementation of partialtreelib.

Folder crawls run as asyncio tasks and suspend only while waiting on the
provider, so many folders can be fetched at once.
"""

# Core abstractions
from .core import (
    RootNode,
    FolderNode,
    FileNode,
    PartialTree,
    RemoteItem,
    ListingPage,
    ListingProvider,
    CrawlScheduler,
    FolderCrawler,
)

# Path resolution
from .paths import absolute_path, relative_path, join_path

# Planning and orchestration
from .planning import TreeCompletionPlan, ABS_DIR_PATH_KEY, REL_DIR_PATH_KEY

# High-level API
from .api import complete_tree, complete_tree_dicts, find_poor_folders

__all__ = [
    # Nodes
    'RootNode',
    'FolderNode',
    'FileNode',
    # Tree
    'PartialTree',
    # Provider
    'RemoteItem',
    'ListingPage',
    'ListingProvider',
    # Crawling
    'CrawlScheduler',
    'FolderCrawler',
    # Paths
    'absolute_path',
    'relative_path',
    'join_path',
    # Planning
    'TreeCompletionPlan',
    'ABS_DIR_PATH_KEY',
    'REL_DIR_PATH_KEY',
    # High-level API
    'complete_tree',
    'complete_tree_dicts',
    'find_poor_folders',
]
