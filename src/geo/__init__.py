"""Geo module - slippy map tile math."""

from .slippy_map import (
    enclosing_tile,
    enclosing_tiles,
    resolve,
    tile_bounds,
    tile_to_position,
)

__all__ = [
    'enclosing_tile',
    'enclosing_tiles',
    'resolve',
    'tile_bounds',
    'tile_to_position',
]
