"""Testing utilities for partialtreelib consumers."""

from .fixtures import FakeListingProvider, SyncFakeListingProvider, file_item, folder_item

__all__ = ['FakeListingProvider', 'SyncFakeListingProvider', 'file_item', 'folder_item']
