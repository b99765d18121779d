"""Контроллер экрана настроек."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from auth.presenter import AuthorizationStatusPresenter
from auth.relay import AuthorizationCallbackRelay
from geo.slippy_map import resolve
from quests.visibility_task import ApplyNoteVisibilityChangedTask
from settings.dispatcher import PreferenceChangeDispatcher
from settings.screen import PreferenceScreen, ScreenEvent
from shared.constants import (
    OAUTH_DIALOG_TAG,
    PREF_SCREEN_OAUTH,
    PREF_SCREEN_QUESTS,
    PREF_SCREEN_QUESTS_INVALIDATION,
    PREFERENCE_DIALOG_TAG,
    QUEST_TILE_ZOOM,
    InteractionKind,
)
from tiles.invalidation import InvalidationDialog, TileCacheInvalidator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from auth.presenter import Authorizer
    from domain.models import PreferenceEntry, TileCoordinate
    from prefs.shown_location import ShownLocationProvider
    from prefs.store import PreferenceStore
    from quests.notes import OsmNoteQuestDao
    from quests.visibility_task import TaskRunner
    from settings.host import SettingsHost
    from tiles.invalidation import TileRegistry

logger = logging.getLogger(__name__)


class SettingsController:
    """
    Связывает экран настроек с хранилищем, кэшем тайлов и авторизацией.

    Жизненный цикл: ``create()`` строит экран и привязывает обработчики,
    ``start()`` обновляет сводку авторизации, ``resume()``/``pause()``
    открывают и закрывают окно, в котором контроллер слушает изменения
    настроек. Вне этого окна изменения настроек ни на что не влияют.
    """

    def __init__(  # noqa: PLR0913
        self,
        prefs: PreferenceStore,
        authorizer: Authorizer,
        shown_location: ShownLocationProvider,
        registry: TileRegistry,
        notes: OsmNoteQuestDao,
        host: SettingsHost,
        runner: TaskRunner,
        zoom: int = QUEST_TILE_ZOOM,
    ) -> None:
        self._prefs = prefs
        self._authorizer = authorizer
        self._shown_location = shown_location
        self._invalidator = TileCacheInvalidator(registry)
        self._notes = notes
        self._host = host
        self._runner = runner
        self._zoom = zoom
        self._relay = AuthorizationCallbackRelay(host, OAUTH_DIALOG_TAG)
        self._screen: PreferenceScreen | None = None
        self._presenter: AuthorizationStatusPresenter | None = None
        self._dispatcher: PreferenceChangeDispatcher | None = None
        self._handlers: dict[str, Callable[[], Any]] = {}
        self._active = False
        logger.info('SettingsController initialized')

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, screen: PreferenceScreen | None = None) -> PreferenceScreen:
        # Слушатель старого диспетчера не должен пережить пересоздание экрана
        self.pause()
        self._screen = screen or PreferenceScreen()
        self._presenter = AuthorizationStatusPresenter(self._authorizer, self._prefs, self._screen)
        self._dispatcher = PreferenceChangeDispatcher(
            self._prefs,
            self._presenter,
            self._create_note_visibility_task,
            self._runner,
        )
        self._handlers = {
            PREF_SCREEN_OAUTH: self.open_oauth_dialog,
            PREF_SCREEN_QUESTS: self._host.navigate_to_quest_selection,
            PREF_SCREEN_QUESTS_INVALIDATION: self.open_invalidation_dialog,
        }
        return self._screen

    def start(self) -> None:
        self.presenter.refresh()

    def resume(self) -> None:
        if self._active:
            return
        self._prefs.register_listener(self.dispatcher.on_change)
        self._active = True
        logger.debug('SettingsController active')

    def pause(self) -> None:
        if not self._active:
            return
        self._prefs.unregister_listener(self.dispatcher.on_change)
        self._active = False
        logger.debug('SettingsController inactive')

    @contextmanager
    def active(self) -> Iterator[SettingsController]:
        """Listen to preference changes for the duration of the block."""
        self.resume()
        try:
            yield self
        finally:
            self.pause()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def screen(self) -> PreferenceScreen:
        return self._require(self._screen)

    @property
    def presenter(self) -> AuthorizationStatusPresenter:
        return self._require(self._presenter)

    @property
    def dispatcher(self) -> PreferenceChangeDispatcher:
        return self._require(self._dispatcher)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def click(self, key: str) -> None:
        """Handle a tap on the entry ``key`` according to its interaction kind."""
        entry = self.screen.require(key)
        if not entry.enabled:
            logger.debug('Click on disabled entry ignored: %s', key)
            return
        if entry.interaction is InteractionKind.ACTION:
            self._handlers[key]()
        elif entry.interaction is InteractionKind.DIALOG:
            self.display_preference_dialog(entry)
        else:
            current = bool(self._prefs.get(key, False))
            self._prefs.set(key, not current)

    def display_preference_dialog(self, entry: PreferenceEntry) -> None:
        if not entry.opens_dialog:
            msg = f'Пункт {entry.key} не открывает диалог ({entry.interaction.value})'
            raise ValueError(msg)
        self._host.show_preference_dialog(entry.key, PREFERENCE_DIALOG_TAG)
        self.screen.notify_observers(ScreenEvent.DIALOG_SHOWN, {'key': entry.key})

    def open_oauth_dialog(self) -> None:
        self._host.show_oauth_dialog(OAUTH_DIALOG_TAG)
        self.screen.notify_observers(ScreenEvent.DIALOG_SHOWN, {'key': PREF_SCREEN_OAUTH})

    def open_invalidation_dialog(self) -> InvalidationDialog:
        dialog = InvalidationDialog(self.shown_tile, self._invalidator)
        dialog.open()
        self._host.show_invalidation_dialog(dialog)
        self.screen.notify_observers(
            ScreenEvent.DIALOG_SHOWN,
            {'key': PREF_SCREEN_QUESTS_INVALIDATION, 'here_enabled': dialog.here_enabled},
        )
        return dialog

    def shown_tile(self) -> TileCoordinate | None:
        """Quest tile of the currently shown map position, resolved anew on each call."""
        return resolve(self._shown_location.current_shown_position(), self._zoom)

    def on_new_intent(self, payload: Any) -> None:
        self._relay.on_external_callback(payload)

    def _create_note_visibility_task(self, show: bool) -> ApplyNoteVisibilityChangedTask:
        return ApplyNoteVisibilityChangedTask(self._notes, show, self._screen)

    @staticmethod
    def _require(value):
        if value is None:
            msg = 'SettingsController.create() ещё не вызван'
            raise RuntimeError(msg)
        return value
