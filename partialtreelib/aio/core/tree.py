"""Identity-keyed store for a partially-known tree.

PartialTree is an append-only arena: nodes are inserted under fresh
identities and never replaced. Concurrent crawls each insert a disjoint
set of identities, which is what lets them share one tree without locks.
"""

import copy
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ...config import NodeStatus
from ...errors import DanglingParentError, DuplicateNodeError, TreeIntegrityError
from .node import FileNode, FolderNode, RootNode, TreeNode, node_from_dict


class PartialTree:
    """A root sentinel plus an insertion-ordered collection of nodes.

    Iteration yields folder and file nodes in insertion order; the root
    is reachable through ``root`` only.
    """

    def __init__(self, root: RootNode, nodes: Iterable[TreeNode] = ()):
        self.root = root
        self._nodes: Dict[str, TreeNode] = {}
        self.extend(nodes)

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> 'PartialTree':
        """Load a tree from its flat wire form.

        Args:
            items: Node mappings, exactly one of which has ``type == "root"``

        Returns:
            A new PartialTree

        Raises:
            TreeIntegrityError: If there is not exactly one root
            DuplicateNodeError: If two mappings share an id
        """
        root: Optional[RootNode] = None
        nodes: List[TreeNode] = []
        for item in items:
            node = node_from_dict(item)
            if isinstance(node, RootNode):
                if root is not None:
                    raise TreeIntegrityError(node.id, "Tree has more than one root")
                root = node
            else:
                nodes.append(node)

        if root is None:
            raise TreeIntegrityError('', "Tree has no root node")
        return cls(root, nodes)

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Dump the tree to its flat wire form, root first."""
        return [self.root.to_dict()] + [node.to_dict() for node in self]

    # Mutation

    def add(self, node: TreeNode) -> None:
        self.extend([node])

    def extend(self, nodes: Iterable[TreeNode]) -> None:
        """Append nodes as one batch.

        The whole batch is checked before anything is inserted, so a
        rejected batch leaves the tree unchanged.

        Raises:
            DuplicateNodeError: If any identity is already taken
        """
        batch = list(nodes)
        seen = set()
        for node in batch:
            if node.id in self._nodes or node.id in seen or node.id == self.root.id:
                raise DuplicateNodeError(node.id)
            seen.add(node.id)
        for node in batch:
            self._nodes[node.id] = node

    def copy(self) -> 'PartialTree':
        """Return a deep copy sharing no mutable state with this tree."""
        return copy.deepcopy(self)

    # Lookup

    def get(self, node_id: str) -> Optional[TreeNode]:
        return self._nodes.get(node_id)

    def parent_of(self, node: TreeNode) -> Union[FolderNode, RootNode]:
        """Resolve a node's parent.

        Raises:
            DanglingParentError: If the parent is not a folder of this tree
        """
        if node.parent_id == self.root.id:
            return self.root
        parent = self._nodes.get(node.parent_id)
        if not isinstance(parent, FolderNode):
            raise DanglingParentError(node.id, node.parent_id)
        return parent

    def children_of(self, parent_id: str) -> List[TreeNode]:
        return [node for node in self if node.parent_id == parent_id]

    def folders(self) -> List[FolderNode]:
        return [node for node in self if isinstance(node, FolderNode)]

    def files(self) -> List[FileNode]:
        return [node for node in self if isinstance(node, FileNode)]

    def poor_folders(self) -> List[FolderNode]:
        """Folders that are checked but not fully fetched."""
        return [folder for folder in self.folders() if folder.is_poor]

    def checked_files(self) -> List[FileNode]:
        return [f for f in self.files() if f.status is NodeStatus.CHECKED]

    def validate(self) -> None:
        """Check that every parent link resolves.

        Raises:
            DanglingParentError: On the first unresolved parent
        """
        for node in self:
            self.parent_of(node)

    # Container protocol

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartialTree):
            return NotImplemented
        return self.root == other.root and list(self) == list(other)

    def __repr__(self) -> str:
        return f"PartialTree(root={self.root.id!r}, nodes={len(self)})"
