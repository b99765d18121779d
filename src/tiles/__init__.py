"""Downloaded quest tiles and their invalidation.

This module provides:
- DownloadedTilesRegistry: SQLite record of tiles already downloaded
- TileCacheInvalidator: removes one or all download records
- InvalidationDialog: 'here / everywhere / cancel' workflow
"""

from tiles.downloaded import DownloadedTilesRegistry
from tiles.invalidation import DialogState, InvalidationDialog, TileCacheInvalidator

__all__ = [
    'DialogState',
    'DownloadedTilesRegistry',
    'InvalidationDialog',
    'TileCacheInvalidator',
]
