"""Path resolution for tree nodes.

Paths are computed by walking parent links up to the root, so they are
correct no matter in which order the nodes were fetched.
"""

from typing import List, Sequence

from ..config import NodeStatus
from ..errors import CyclicAncestryError
from .core.node import FolderNode, RootNode, TreeNode
from .core.tree import PartialTree


def absolute_path(tree: PartialTree, node: TreeNode) -> List[TreeNode]:
    """Get the chain of nodes from the top of the tree down to ``node``.

    The root sentinel is excluded; ``node`` itself is included.

    Args:
        tree: Tree holding ``node`` and all of its ancestors
        node: Node to resolve

    Returns:
        Nodes ordered root-side first

    Raises:
        DanglingParentError: If a parent link does not resolve
        CyclicAncestryError: If the chain loops back on itself
    """
    path: List[TreeNode] = []
    seen = set()
    current = node
    while not isinstance(current, RootNode):
        if current.id in seen:
            raise CyclicAncestryError(node.id)
        seen.add(current.id)
        path.append(current)
        current = tree.parent_of(current)

    path.reverse()
    return path


def relative_path(abs_path: Sequence[TreeNode]) -> List[TreeNode]:
    """Trim an absolute path to start at its first checked folder.

    When no folder in the chain is checked, the whole path is returned.

    Example:
        >>> # docs (unchecked) / img (checked) / a.png
        >>> [n.name() for n in relative_path(path)]
        ['img', 'a.png']
    """
    for index, node in enumerate(abs_path):
        if isinstance(node, FolderNode) and node.status is NodeStatus.CHECKED:
            return list(abs_path[index:])
    return list(abs_path)


def join_path(nodes: Sequence[TreeNode], separator: str = '/', name_key: str = 'name') -> str:
    """Join node display names; an empty path joins to an empty string."""
    return separator.join(node.name(name_key) for node in nodes)
