"""Exception hierarchy for partialtreelib.

Every error raised on purpose by the library derives from
PartialTreeError, so callers can catch the whole family at once.
"""

from typing import Any, List, Optional


class PartialTreeError(Exception):
    """Base class for all partialtreelib errors."""


class ProviderListingError(PartialTreeError):
    """A provider ``list`` call failed while crawling a folder.

    The provider's own exception is chained as ``__cause__``.
    """

    def __init__(self, folder_id: str, cursor: Optional[str], message: str = ""):
        self.folder_id = folder_id
        self.cursor = cursor
        detail = f": {message}" if message else ""
        super().__init__(
            f"Listing failed for folder '{folder_id}' at cursor '{cursor}'{detail}"
        )


class MalformedListingError(PartialTreeError):
    """A provider response could not be read as a listing page."""

    def __init__(self, message: str, response: Any = None):
        self.response = response
        super().__init__(message)


class TreeIntegrityError(PartialTreeError):
    """The tree violates a structural invariant."""

    def __init__(self, node_id: str, message: str):
        self.node_id = node_id
        super().__init__(message)


class DanglingParentError(TreeIntegrityError):
    """A node's parent identity is neither a folder in the tree nor the root."""

    def __init__(self, node_id: str, parent_id: str):
        self.parent_id = parent_id
        super().__init__(
            node_id, f"Node '{node_id}' references unknown parent '{parent_id}'"
        )


class CyclicAncestryError(TreeIntegrityError):
    """Walking parent links from a node never reaches the root."""

    def __init__(self, node_id: str):
        super().__init__(node_id, f"Ancestor chain of '{node_id}' contains a cycle")


class DuplicateNodeError(TreeIntegrityError):
    """Two nodes share one identity."""

    def __init__(self, node_id: str):
        super().__init__(node_id, f"Node '{node_id}' already exists in the tree")


class InvalidConfigurationError(PartialTreeError, ValueError):
    """A CompletionConfig failed validation."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid configuration: {', '.join(self.problems)}")
