"""SQLite-based registry of downloaded quest tiles.

This module provides DownloadedTilesRegistry which remembers which tiles at
the quest zoom level were already downloaded for which quest type, so that
they are not fetched again. Removing a record forces a re-download.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from shared.constants import QUEST_TILE_ZOOM

if TYPE_CHECKING:
    from domain.models import TileCoordinate, TileRect

logger = logging.getLogger(__name__)

_MEMORY = ':memory:'


class DownloadedTilesRegistry:
    """Registry of (tile, quest type) download records.

    Features:
    - One SQLite database, one row per tile and quest type
    - All tiles are stored at a single zoom level (the quest zoom)
    - Writes are serialized with a lock and committed before returning

    Usage:
        registry = DownloadedTilesRegistry('downloaded_tiles.db')
        registry.put(tile, 'AddOpeningHours')
        registry.remove(tile)
        registry.close()
    """

    def __init__(self, db_path: str | Path = _MEMORY, zoom: int = QUEST_TILE_ZOOM) -> None:
        """Initialize registry.

        Args:
            db_path: SQLite file. Defaults to an in-memory database.
            zoom: Zoom level of all stored tiles.
        """
        if str(db_path) != _MEMORY:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.db_path = str(db_path)
        self.zoom = zoom
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        if self.db_path != _MEMORY:
            self._conn.execute('PRAGMA journal_mode=WAL')
        self._init_schema()
        logger.info('DownloadedTilesRegistry initialized at %s (zoom %d)', self.db_path, zoom)

    def _init_schema(self) -> None:
        self._conn.executescript('''
            CREATE TABLE IF NOT EXISTS downloaded_tiles (
                x INTEGER NOT NULL,
                y INTEGER NOT NULL,
                quest_type TEXT NOT NULL,
                downloaded_at INTEGER NOT NULL,
                PRIMARY KEY (x, y, quest_type)
            );
        ''')
        self._conn.commit()

    def _check_zoom(self, zoom: int) -> None:
        if zoom != self.zoom:
            msg = f'Тайл зума {zoom} не соответствует зуму реестра {self.zoom}'
            raise ValueError(msg)

    def put(
        self,
        tile: TileCoordinate,
        quest_type: str,
        downloaded_at: int | None = None,
    ) -> None:
        """Record that ``tile`` was downloaded for ``quest_type``."""
        self._check_zoom(tile.zoom)
        now = downloaded_at if downloaded_at is not None else int(time.time())
        with self._lock:
            self._conn.execute(
                '''INSERT OR REPLACE INTO downloaded_tiles (x, y, quest_type, downloaded_at)
                   VALUES (?, ?, ?, ?)''',
                (tile.x, tile.y, quest_type, now),
            )
            self._conn.commit()

    def put_all(
        self,
        rect: TileRect,
        quest_type: str,
        downloaded_at: int | None = None,
    ) -> None:
        """Record every tile of ``rect`` in a single transaction."""
        self._check_zoom(rect.zoom)
        now = downloaded_at if downloaded_at is not None else int(time.time())
        with self._lock:
            self._conn.executemany(
                '''INSERT OR REPLACE INTO downloaded_tiles (x, y, quest_type, downloaded_at)
                   VALUES (?, ?, ?, ?)''',
                [(t.x, t.y, quest_type, now) for t in rect.tiles()],
            )
            self._conn.commit()

    def get(self, rect: TileRect, ignore_older_than: int = 0) -> list[str]:
        """Quest types downloaded for *every* tile of ``rect`` after ``ignore_older_than``.

        Args:
            rect: Tile rectangle at the registry zoom.
            ignore_older_than: Unix timestamp; older records do not count.

        Returns:
            Sorted quest type names.
        """
        self._check_zoom(rect.zoom)
        tile_count = (rect.right - rect.left + 1) * (rect.bottom - rect.top + 1)
        with self._lock:
            cursor = self._conn.execute(
                '''SELECT quest_type FROM downloaded_tiles
                   WHERE x BETWEEN ? AND ? AND y BETWEEN ? AND ? AND downloaded_at > ?
                   GROUP BY quest_type HAVING COUNT(*) >= ?''',
                (rect.left, rect.right, rect.top, rect.bottom, ignore_older_than, tile_count),
            )
            rows = cursor.fetchall()
        return sorted(row[0] for row in rows)

    def contains(self, tile: TileCoordinate) -> bool:
        self._check_zoom(tile.zoom)
        with self._lock:
            cursor = self._conn.execute(
                'SELECT 1 FROM downloaded_tiles WHERE x = ? AND y = ? LIMIT 1',
                (tile.x, tile.y),
            )
            return cursor.fetchone() is not None

    def count(self) -> int:
        with self._lock:
            return self._conn.execute('SELECT COUNT(*) FROM downloaded_tiles').fetchone()[0]

    def remove(self, tile: TileCoordinate) -> int:
        """Delete all records of ``tile``; a missing tile is a no-op.

        Returns:
            Number of deleted records.
        """
        self._check_zoom(tile.zoom)
        with self._lock:
            cursor = self._conn.execute(
                'DELETE FROM downloaded_tiles WHERE x = ? AND y = ?',
                (tile.x, tile.y),
            )
            self._conn.commit()
        logger.info('Removed %d download records of tile %d/%d', cursor.rowcount, tile.x, tile.y)
        return cursor.rowcount

    def remove_all(self) -> int:
        with self._lock:
            cursor = self._conn.execute('DELETE FROM downloaded_tiles')
            self._conn.commit()
        logger.info('Removed all download records (%d)', cursor.rowcount)
        return cursor.rowcount

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info('DownloadedTilesRegistry closed')

    def __enter__(self) -> DownloadedTilesRegistry:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
