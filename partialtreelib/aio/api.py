"""High-level async API for partialtreelib.

This module provides simple entry points for completing a partial tree.
"""

import dataclasses
from typing import Any, Dict, Iterable, List, Optional

from ..config import CompletionConfig, DEFAULT_CONCURRENCY
from .core import FolderNode, PartialTree
from .planning import TreeCompletionPlan


async def complete_tree(
    tree: PartialTree,
    provider: Any,
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    config: Optional[CompletionConfig] = None
) -> List[Dict[str, Any]]:
    """Fetch whatever is missing from ``tree`` and list its checked files.

    Every checked folder that was never fetched, or that still has pages
    left, is crawled to exhaustion; newly found sub-folders are crawled
    too. The input tree is not modified.

    Args:
        tree: Partially-known tree snapshot
        provider: Object with a ``list(path, options)`` method
        concurrency: Maximum concurrent folder crawls; overrides
            ``config.concurrency`` when set to a non-default value
        config: Full configuration

    Returns:
        One dict per checked file: the file's provider metadata plus
        ``absDirPath`` and ``relDirPath``

    Example:
        >>> files = await complete_tree(tree, provider)
        >>> for f in files:
        ...     print(f['relDirPath'])
    """
    if config is None:
        config = CompletionConfig(concurrency=concurrency)
    elif concurrency != DEFAULT_CONCURRENCY:
        config = dataclasses.replace(config, concurrency=concurrency)
    plan = TreeCompletionPlan(config)
    return await plan.execute(tree, provider)


async def complete_tree_dicts(
    items: Iterable[Dict[str, Any]],
    provider: Any,
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    config: Optional[CompletionConfig] = None
) -> List[Dict[str, Any]]:
    """Same as complete_tree, for a tree in its flat wire form."""
    return await complete_tree(
        PartialTree.from_dicts(items), provider, concurrency, config=config
    )


def find_poor_folders(tree: PartialTree) -> List[FolderNode]:
    """Get the folders a completion run would crawl first."""
    return tree.poor_folders()
