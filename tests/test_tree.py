"""
Tests for the PartialTree store and node variants.
"""

import pytest

from partialtreelib import (
    DanglingParentError,
    DuplicateNodeError,
    NodeStatus,
    TreeIntegrityError,
)
from partialtreelib.aio import FileNode, FolderNode, PartialTree, RootNode


CHECKED = NodeStatus.CHECKED
UNCHECKED = NodeStatus.UNCHECKED


def make_tree():
    """Build a small mixed-freshness tree.

    root/
    ├── /a      checked, never fetched          (poor)
    ├── /b      checked, mid-pagination         (poor)
    ├── /c      checked, fully fetched
    ├── /d      unchecked, never fetched
    └── /c/x.txt
    """
    return PartialTree(RootNode('/'), [
        FolderNode('/a', '/', CHECKED),
        FolderNode('/b', '/', CHECKED, cached=True, next_page_path='/b?page=2'),
        FolderNode('/c', '/', CHECKED, cached=True),
        FolderNode('/d', '/', UNCHECKED),
        FileNode('/c/x.txt', '/c', CHECKED, data={'name': 'x.txt'}),
    ])


class TestPoorPredicate:
    """Only checked folders with unknown contents are poor."""

    def test_poor_folders(self):
        tree = make_tree()
        assert [f.id for f in tree.poor_folders()] == ['/a', '/b']

    def test_exhausted_folder_is_not_poor(self):
        folder = FolderNode('/a', '/', CHECKED)
        assert folder.is_poor
        folder.mark_exhausted()
        assert folder.cached is True
        assert folder.next_page_path is None
        assert not folder.is_poor

    def test_partial_folder_is_never_poor(self):
        folder = FolderNode('/a', '/', NodeStatus.PARTIAL)
        assert not folder.is_poor


class TestTreeStore:
    """Insertion, lookup and integrity checks."""

    def test_iteration_follows_insertion_order(self):
        tree = make_tree()
        assert [n.id for n in tree] == ['/a', '/b', '/c', '/d', '/c/x.txt']
        assert len(tree) == 5
        assert '/c/x.txt' in tree

    def test_duplicate_identity_rejected(self):
        tree = make_tree()
        with pytest.raises(DuplicateNodeError) as exc_info:
            tree.add(FileNode('/a', '/', CHECKED))
        assert exc_info.value.node_id == '/a'

    def test_rejected_batch_leaves_tree_unchanged(self):
        tree = make_tree()
        batch = [FileNode('/a/new.txt', '/a', CHECKED), FileNode('/c/x.txt', '/c', CHECKED)]
        with pytest.raises(DuplicateNodeError):
            tree.extend(batch)
        assert '/a/new.txt' not in tree
        assert len(tree) == 5

    def test_duplicate_within_batch_rejected(self):
        tree = make_tree()
        with pytest.raises(DuplicateNodeError):
            tree.extend([FileNode('/a/1', '/a'), FileNode('/a/1', '/a')])

    def test_parent_of_resolves_root_and_folders(self):
        tree = make_tree()
        assert tree.parent_of(tree.get('/a')) is tree.root
        assert tree.parent_of(tree.get('/c/x.txt')) is tree.get('/c')

    def test_dangling_parent(self):
        tree = make_tree()
        orphan = FileNode('/zzz/f', '/zzz', CHECKED)
        tree.add(orphan)
        with pytest.raises(DanglingParentError) as exc_info:
            tree.parent_of(orphan)
        assert exc_info.value.parent_id == '/zzz'
        with pytest.raises(DanglingParentError):
            tree.validate()

    def test_file_cannot_be_a_parent(self):
        tree = make_tree()
        child = FileNode('/c/x.txt/y', '/c/x.txt', CHECKED)
        tree.add(child)
        with pytest.raises(DanglingParentError):
            tree.parent_of(child)

    def test_children_and_checked_files(self):
        tree = make_tree()
        tree.add(FileNode('/c/y.txt', '/c', UNCHECKED))
        assert [n.id for n in tree.children_of('/c')] == ['/c/x.txt', '/c/y.txt']
        assert [f.id for f in tree.checked_files()] == ['/c/x.txt']

    def test_copy_is_deep(self):
        tree = make_tree()
        clone = tree.copy()
        assert clone == tree

        clone.get('/a').mark_exhausted()
        clone.get('/c/x.txt').data['name'] = 'renamed'
        clone.add(FileNode('/a/new', '/a', CHECKED))

        assert tree.get('/a').cached is False
        assert tree.get('/c/x.txt').data['name'] == 'x.txt'
        assert '/a/new' not in tree
        assert clone != tree


class TestWireForm:
    """Loading and dumping the flat list form."""

    def test_from_dicts(self):
        tree = PartialTree.from_dicts([
            {'type': 'root', 'id': '/', 'cached': True, 'nextPagePath': None},
            {'type': 'folder', 'id': '/a', 'parentId': '/', 'status': 'checked',
             'cached': True, 'nextPagePath': '', 'data': {'name': 'a'}},
            {'type': 'file', 'id': '/a/f', 'parentId': '/a', 'status': 'unchecked',
             'data': {'name': 'f'}},
        ])
        assert tree.root == RootNode('/')
        folder = tree.get('/a')
        assert isinstance(folder, FolderNode)
        assert folder.next_page_path is None
        assert not folder.is_poor
        assert tree.get('/a/f').status is UNCHECKED

    def test_to_dicts_puts_root_first(self):
        dumped = make_tree().to_dicts()
        assert dumped[0] == {'type': 'root', 'id': '/'}
        assert dumped[2]['nextPagePath'] == '/b?page=2'
        assert PartialTree.from_dicts(dumped) == make_tree()

    def test_missing_root(self):
        with pytest.raises(TreeIntegrityError):
            PartialTree.from_dicts([{'type': 'file', 'id': '/f', 'parentId': '/'}])

    def test_two_roots(self):
        with pytest.raises(TreeIntegrityError):
            PartialTree.from_dicts([{'type': 'root', 'id': '/'}, {'type': 'root', 'id': '/2'}])

    def test_unknown_type(self):
        with pytest.raises(TreeIntegrityError):
            PartialTree.from_dicts([{'type': 'root', 'id': '/'}, {'type': 'link', 'id': '/l'}])

    def test_duplicate_ids(self):
        with pytest.raises(DuplicateNodeError):
            PartialTree.from_dicts([
                {'type': 'root', 'id': '/'},
                {'type': 'file', 'id': '/f', 'parentId': '/'},
                {'type': 'folder', 'id': '/f', 'parentId': '/'},
            ])
