"""Core abstractions for async tree completion.

Nodes, the tree store, the provider interface, and the crawl machinery.
"""

from .node import RootNode, FolderNode, FileNode, TreeNode, AnyNode, node_from_dict
from .tree import PartialTree
from .provider import RemoteItem, ListingPage, ListingProvider, fetch_page
from .scheduler import CrawlScheduler
from .crawler import FolderCrawler

__all__ = [
    # Nodes
    'RootNode',
    'FolderNode',
    'FileNode',
    'TreeNode',
    'AnyNode',
    'node_from_dict',
    # Tree
    'PartialTree',
    # Provider
    'RemoteItem',
    'ListingPage',
    'ListingProvider',
    'fetch_page',
    # Crawling
    'CrawlScheduler',
    'FolderCrawler',
]
