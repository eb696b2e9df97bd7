"""Tree node variants.

A partial tree holds three kinds of node: the implicit root, folders and
files. Nodes never reference their children; each one carries only the
identity of its parent, and the tree resolves that identity on demand.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ...config import NodeKind, NodeStatus
from ...errors import TreeIntegrityError


@dataclass
class RootNode:
    """Sentinel for the top of the tree.

    The root is never crawled and never appears in a path.
    """
    id: str

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ROOT

    def to_dict(self) -> Dict[str, Any]:
        return {'type': NodeKind.ROOT.value, 'id': self.id}


@dataclass
class FolderNode:
    """A remote folder and its pagination state.

    Attributes:
        id: Remote request path, unique across the tree
        parent_id: Identity of the parent folder or of the root
        status: Selection state
        cached: True once at least one listing page has been fetched
        next_page_path: Cursor of the next unfetched page, None when none is pending
        data: Provider-supplied metadata
    """
    id: str
    parent_id: str
    status: NodeStatus = NodeStatus.UNCHECKED
    cached: bool = False
    next_page_path: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FOLDER

    @property
    def is_poor(self) -> bool:
        """True if this folder is checked but its listing is not fully known.

        Either it was never fetched, or some pages are left to fetch.
        """
        return self.status is NodeStatus.CHECKED and (
            not self.cached or self.next_page_path is not None
        )

    def mark_exhausted(self) -> None:
        self.cached = True
        self.next_page_path = None

    def name(self, name_key: str = 'name') -> str:
        return str(self.data.get(name_key, self.id))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': NodeKind.FOLDER.value,
            'id': self.id,
            'parentId': self.parent_id,
            'status': self.status.value,
            'cached': self.cached,
            'nextPagePath': self.next_page_path,
            'data': dict(self.data),
        }


@dataclass
class FileNode:
    """A remote file."""
    id: str
    parent_id: str
    status: NodeStatus = NodeStatus.UNCHECKED
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    def name(self, name_key: str = 'name') -> str:
        return str(self.data.get(name_key, self.id))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': NodeKind.FILE.value,
            'id': self.id,
            'parentId': self.parent_id,
            'status': self.status.value,
            'data': dict(self.data),
        }


TreeNode = Union[FolderNode, FileNode]
AnyNode = Union[RootNode, FolderNode, FileNode]


def node_from_dict(item: Dict[str, Any]) -> AnyNode:
    """Build a node from its wire mapping.

    Args:
        item: Mapping with a ``type`` key of "root", "folder" or "file"

    Returns:
        The matching node variant

    Raises:
        TreeIntegrityError: If the mapping has no usable type or id
    """
    node_id = item.get('id')
    if not node_id:
        raise TreeIntegrityError(str(node_id), f"Node mapping has no id: {item!r}")

    try:
        kind = NodeKind(item.get('type'))
    except ValueError:
        raise TreeIntegrityError(
            node_id, f"Node '{node_id}' has unknown type {item.get('type')!r}"
        ) from None

    if kind is NodeKind.ROOT:
        return RootNode(id=node_id)

    try:
        status = NodeStatus(item.get('status', NodeStatus.UNCHECKED.value))
    except ValueError:
        raise TreeIntegrityError(
            node_id, f"Node '{node_id}' has unknown status {item.get('status')!r}"
        ) from None
    data = dict(item.get('data') or {})
    parent_id = item.get('parentId')
    if parent_id is None:
        raise TreeIntegrityError(node_id, f"Node '{node_id}' has no parentId")

    if kind is NodeKind.FOLDER:
        return FolderNode(
            id=node_id,
            parent_id=parent_id,
            status=status,
            cached=bool(item.get('cached', False)),
            next_page_path=item.get('nextPagePath') or None,
            data=data,
        )
    return FileNode(id=node_id, parent_id=parent_id, status=status, data=data)
