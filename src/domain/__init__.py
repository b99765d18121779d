"""Domain layer - business models."""
from domain.models import (
    AuthorizationState,
    BoundingBox,
    GeoPosition,
    NoteQuest,
    PreferenceEntry,
    SummaryKind,
    SummaryText,
    TileCoordinate,
    TileRect,
)

__all__ = [
    'AuthorizationState',
    'BoundingBox',
    'GeoPosition',
    'NoteQuest',
    'PreferenceEntry',
    'SummaryKind',
    'SummaryText',
    'TileCoordinate',
    'TileRect',
]
