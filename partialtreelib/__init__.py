"""PartialTreeLib - completion of partially-fetched remote file trees.

Given a tree snapshot where some checked folders were never listed or
were only listed in part, PartialTreeLib crawls the missing pages,
merges what it finds, and returns every checked file with its path.

Usage:
    from partialtreelib.aio import complete_tree

    files = await complete_tree(tree, provider)
"""

__version__ = "0.1.0"

from . import aio
from .config import CompletionConfig, NodeKind, NodeStatus
from .errors import (
    PartialTreeError,
    ProviderListingError,
    MalformedListingError,
    TreeIntegrityError,
    DanglingParentError,
    CyclicAncestryError,
    DuplicateNodeError,
    InvalidConfigurationError,
)

__all__ = [
    "__version__",
    "aio",
    # Configuration
    "CompletionConfig",
    "NodeKind",
    "NodeStatus",
    # Errors
    "PartialTreeError",
    "ProviderListingError",
    "MalformedListingError",
    "TreeIntegrityError",
    "DanglingParentError",
    "CyclicAncestryError",
    "DuplicateNodeError",
    "InvalidConfigurationError",
]
