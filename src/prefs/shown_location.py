"""Позиция последнего показанного вида карты.

Карта хранит центр вида в отдельном пространстве имён настроек как два
«сырых» 64-битных значения: битовые образы IEEE-754 double. Модуль
декодирует их обратно в градусы и изолирует остальное ядро от этого формата.
"""

from __future__ import annotations

import logging
import struct
from typing import TYPE_CHECKING

from pydantic import ValidationError

from domain.models import GeoPosition
from shared.constants import MAP_PREF_LAT, MAP_PREF_LON

if TYPE_CHECKING:
    from prefs.store import PreferenceStore

logger = logging.getLogger(__name__)

_DOUBLE = struct.Struct('<d')
_LONG = struct.Struct('<q')
_UNSIGNED_LONG = struct.Struct('<Q')


def bits_to_double(bits: int) -> float:
    """Reinterpret a 64-bit pattern as an IEEE-754 double.

    Both the signed and the unsigned reading of the pattern are accepted.
    """
    packer = _LONG if bits < 0 else _UNSIGNED_LONG
    return _DOUBLE.unpack(packer.pack(bits))[0]


def double_to_bits(value: float) -> int:
    """Reinterpret a double as a signed 64-bit integer."""
    return _LONG.unpack(_DOUBLE.pack(value))[0]


class ShownLocationProvider:
    """Reads the shown map position from the map namespace store."""

    def __init__(self, map_prefs: PreferenceStore) -> None:
        self._prefs = map_prefs

    def current_shown_position(self) -> GeoPosition | None:
        """Decoded position, or ``None`` unless both coordinates are stored."""
        if not (self._prefs.contains(MAP_PREF_LAT) and self._prefs.contains(MAP_PREF_LON)):
            return None
        raw_lat = self._prefs.get(MAP_PREF_LAT)
        raw_lon = self._prefs.get(MAP_PREF_LON)
        try:
            lat = bits_to_double(int(raw_lat))
            lon = bits_to_double(int(raw_lon))
        except (TypeError, ValueError, struct.error):
            # Значение удалено между contains() и get() или не является 64-битным образом
            logger.warning('Stored map position is not decodable: lat=%r lon=%r', raw_lat, raw_lon)
            return None
        try:
            return GeoPosition(latitude=lat, longitude=lon)
        except ValidationError:
            logger.warning('Stored map position out of range: lat=%s lon=%s', lat, lon)
            return None

    def store_shown_position(self, position: GeoPosition) -> None:
        """Persist ``position`` the way the map view does."""
        self._prefs.set(MAP_PREF_LAT, double_to_bits(position.latitude))
        self._prefs.set(MAP_PREF_LON, double_to_bits(position.longitude))
