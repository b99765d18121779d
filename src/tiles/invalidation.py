"""Инвалидация кэша загруженных тайлов и диалог выбора области."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from shared.errors import InvalidationUnavailableError, InvalidDialogStateError

if TYPE_CHECKING:
    from collections.abc import Callable

    from domain.models import TileCoordinate

logger = logging.getLogger(__name__)


class TileRegistry(Protocol):
    def remove(self, tile: TileCoordinate) -> object: ...

    def remove_all(self) -> object: ...


class TileCacheInvalidator:
    """Removes download records so the tiles are fetched again."""

    def __init__(self, registry: TileRegistry) -> None:
        self._registry = registry

    def invalidate_one(self, tile: TileCoordinate) -> None:
        logger.info('Invalidating tile %d/%d/%d', tile.zoom, tile.x, tile.y)
        self._registry.remove(tile)

    def invalidate_all(self) -> None:
        logger.info('Invalidating all downloaded tiles')
        self._registry.remove_all()


class DialogState(str, Enum):
    CLOSED = 'closed'
    OPEN = 'open'
    CONFIRMED_HERE = 'confirmed_here'
    CONFIRMED_EVERYWHERE = 'confirmed_everywhere'
    CANCELLED = 'cancelled'


class InvalidationDialog:
    """
    Диалог «обновить квесты здесь / везде / отмена».

    При каждом открытии заново определяет показанный тайл: если позиция
    неизвестна, действие «здесь» недоступно до следующего открытия.
    После любого исхода диалог возвращается в CLOSED, а исход хранится в
    ``outcome``.
    """

    def __init__(
        self,
        shown_tile: Callable[[], TileCoordinate | None],
        invalidator: TileCacheInvalidator,
    ) -> None:
        self._shown_tile = shown_tile
        self._invalidator = invalidator
        self._state = DialogState.CLOSED
        self._tile: TileCoordinate | None = None
        self.outcome: DialogState | None = None

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def here_enabled(self) -> bool:
        return self._state is DialogState.OPEN and self._tile is not None

    @property
    def tile(self) -> TileCoordinate | None:
        """Tile resolved when the dialog was opened."""
        return self._tile

    def open(self) -> None:
        if self._state is not DialogState.CLOSED:
            msg = f'Диалог уже открыт (состояние {self._state.value})'
            raise InvalidDialogStateError(msg)
        self._tile = self._shown_tile()
        self._state = DialogState.OPEN
        self.outcome = None
        logger.debug('Invalidation dialog opened, here_enabled=%s', self._tile is not None)

    def confirm_here(self) -> TileCoordinate:
        self._require_open()
        if self._tile is None:
            msg = 'Показанный тайл неизвестен, действие «здесь» недоступно'
            raise InvalidationUnavailableError(msg)
        # Позиция могла измениться, пока диалог был открыт
        tile = self._shown_tile() or self._tile
        self._invalidator.invalidate_one(tile)
        self._finish(DialogState.CONFIRMED_HERE)
        return tile

    def confirm_everywhere(self) -> None:
        self._require_open()
        self._invalidator.invalidate_all()
        self._finish(DialogState.CONFIRMED_EVERYWHERE)

    def cancel(self) -> None:
        self._require_open()
        self._finish(DialogState.CANCELLED)

    def _require_open(self) -> None:
        if self._state is not DialogState.OPEN:
            msg = f'Диалог не открыт (состояние {self._state.value})'
            raise InvalidDialogStateError(msg)

    def _finish(self, outcome: DialogState) -> None:
        self.outcome = outcome
        self._state = DialogState.CLOSED
        self._tile = None
        logger.debug('Invalidation dialog closed: %s', outcome.value)
