"""
Математика тайлов slippy map (OSM / Web Mercator).

Квесты загружаются и кэшируются тайлами фиксированного зума
(``QUEST_TILE_ZOOM``); здесь позиция переводится в такой тайл и обратно.
"""

from __future__ import annotations

import math

from domain.models import BoundingBox, GeoPosition, TileCoordinate, TileRect
from shared.constants import (
    MERCATOR_MAX_LAT_DEG,
    QUEST_TILE_ZOOM,
    WORLD_LNG_HALF_SPAN_DEG,
    WORLD_LNG_SPAN_DEG,
)


def _tiles_per_side(zoom: int) -> int:
    if zoom < 0:
        msg = 'zoom не может быть отрицательным'
        raise ValueError(msg)
    return 1 << zoom


def _clamp_index(value: float, n: int) -> int:
    return min(max(math.floor(value), 0), n - 1)


def lon_to_tile_x(lon: float, zoom: int) -> int:
    n = _tiles_per_side(zoom)
    return _clamp_index((lon + WORLD_LNG_HALF_SPAN_DEG) / WORLD_LNG_SPAN_DEG * n, n)


def lat_to_tile_y(lat: float, zoom: int) -> int:
    n = _tiles_per_side(zoom)
    lat = min(max(lat, -MERCATOR_MAX_LAT_DEG), MERCATOR_MAX_LAT_DEG)
    lat_rad = math.radians(lat)
    merc = math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad))
    return _clamp_index((1 - merc / math.pi) / 2 * n, n)


def enclosing_tile(position: GeoPosition, zoom: int = QUEST_TILE_ZOOM) -> TileCoordinate:
    """Tile at ``zoom`` that contains ``position``."""
    return TileCoordinate(
        x=lon_to_tile_x(position.longitude, zoom),
        y=lat_to_tile_y(position.latitude, zoom),
        zoom=zoom,
    )


def resolve(
    position: GeoPosition | None,
    zoom: int = QUEST_TILE_ZOOM,
) -> TileCoordinate | None:
    """
    Разрешить позицию в тайл кэша.

    Отсутствующая позиция даёт ``None`` без исключения; координаты тайла
    всегда лежат в [0, 2^zoom - 1].
    """
    if position is None:
        return None
    return enclosing_tile(position, zoom)


def tile_to_position(tile: TileCoordinate) -> GeoPosition:
    """North-west corner of ``tile``."""
    n = _tiles_per_side(tile.zoom)
    lon = tile.x / n * WORLD_LNG_SPAN_DEG - WORLD_LNG_HALF_SPAN_DEG
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * tile.y / n))))
    return GeoPosition(latitude=lat, longitude=lon)


def tile_bounds(tile: TileCoordinate) -> BoundingBox:
    nw = tile_to_position(tile)
    n = _tiles_per_side(tile.zoom)
    # Угол (x+1, y+1) может выйти за сетку только на 2^zoom, это всё ещё край мира
    se_x = min(tile.x + 1, n)
    se_y = min(tile.y + 1, n)
    lon = se_x / n * WORLD_LNG_SPAN_DEG - WORLD_LNG_HALF_SPAN_DEG
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * se_y / n))))
    return BoundingBox(
        min_latitude=lat,
        min_longitude=nw.longitude,
        max_latitude=nw.latitude,
        max_longitude=lon,
    )


def enclosing_tiles(bbox: BoundingBox, zoom: int = QUEST_TILE_ZOOM) -> TileRect:
    """Inclusive tile rectangle covering ``bbox``.

    Boxes crossing the 180th meridian are not supported.
    """
    if bbox.min_longitude > bbox.max_longitude:
        msg = 'bbox пересекает 180-й меридиан'
        raise ValueError(msg)
    return TileRect(
        left=lon_to_tile_x(bbox.min_longitude, zoom),
        top=lat_to_tile_y(bbox.max_latitude, zoom),
        right=lon_to_tile_x(bbox.max_longitude, zoom),
        bottom=lat_to_tile_y(bbox.min_latitude, zoom),
        zoom=zoom,
    )
