"""Configuration for partial tree completion.

This module defines the node vocabulary shared by the whole package and
the knobs a caller can turn for a completion run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class NodeStatus(Enum):
    """Selection state of a tree node.

    Only CHECKED folders are crawled and only CHECKED files are emitted.
    """
    CHECKED = "checked"
    UNCHECKED = "unchecked"
    PARTIAL = "partial"      # Some, but not all, descendants checked


class NodeKind(Enum):
    """Discriminator for the node variants."""
    ROOT = "root"
    FOLDER = "folder"
    FILE = "file"


DEFAULT_CONCURRENCY = 6


@dataclass
class CompletionConfig:
    """Configuration for a tree completion run.

    The driver validates this before doing any work, so an invalid
    configuration never reaches the provider.
    """

    # Maximum number of folder crawls in flight at once
    concurrency: int = DEFAULT_CONCURRENCY

    # Separator used to join path segments into output strings
    path_separator: str = "/"

    # Passed verbatim as ``options`` to every provider ``list`` call
    list_options: Dict[str, Any] = field(default_factory=dict)

    # Metadata key holding a node's display name
    name_key: str = "name"

    @classmethod
    def default(cls) -> 'CompletionConfig':
        return cls()

    @classmethod
    def sequential(cls) -> 'CompletionConfig':
        """Create config that crawls one folder at a time.

        Handy when a provider enforces strict rate limits, and in tests
        that need a reproducible discovery order.
        """
        return cls(concurrency=1)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.concurrency, int) or isinstance(self.concurrency, bool):
            errors.append("concurrency must be an integer")
        elif self.concurrency < 1:
            errors.append("concurrency must be at least 1")

        if not isinstance(self.path_separator, str):
            errors.append("path_separator must be a string")

        if not isinstance(self.name_key, str) or not self.name_key:
            errors.append("name_key must be a non-empty string")

        if not isinstance(self.list_options, dict):
            errors.append("list_options must be a dict")

        return errors
