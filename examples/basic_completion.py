#!/usr/bin/env python3
"""
Basic tree completion example.

This example demonstrates:
- Describing a partially-fetched tree in its flat wire form
- Completing it against an in-memory provider
- Reading absolute and relative paths from the result
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from partialtreelib.aio import TreeCompletionPlan, PartialTree
from partialtreelib.testing import FakeListingProvider, file_item, folder_item


async def main():
    """Complete a small tree and print the checked files."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # The user checked /photos, which was never opened, and /music,
    # whose first page was loaded but which has more pages.
    tree = PartialTree.from_dicts([
        {'type': 'root', 'id': '/'},
        {'type': 'folder', 'id': '/photos', 'parentId': '/', 'status': 'checked',
         'cached': False, 'nextPagePath': None, 'data': {'name': 'photos'}},
        {'type': 'folder', 'id': '/music', 'parentId': '/', 'status': 'checked',
         'cached': True, 'nextPagePath': '/music?page=2', 'data': {'name': 'music'}},
        {'type': 'file', 'id': '/music/intro.mp3', 'parentId': '/music',
         'status': 'checked', 'data': {'name': 'intro.mp3'}},
    ])

    provider = FakeListingProvider.from_listing({
        '/photos': [
            [file_item('/photos/cat.jpg'), folder_item('/photos/2024')],
            [file_item('/photos/dog.jpg')],
        ],
        '/photos/2024': [[file_item('/photos/2024/beach.jpg')]],
        '/music': [
            [file_item('/music/intro.mp3')],
            [file_item('/music/outro.mp3')],
        ],
    }, delay=0.05)

    plan = TreeCompletionPlan()
    files = await plan.execute(tree, provider)

    print(f"\n{'Absolute path':<30} Relative path")
    print("-" * 50)
    for record in files:
        print(f"{record['absDirPath']:<30} {record['relDirPath']}")

    stats = plan.get_stats()
    print(f"\nCrawled {stats['folders_crawled']} folders in {stats['pages_fetched']} pages")


if __name__ == "__main__":
    asyncio.run(main())
