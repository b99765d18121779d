"""Модель экрана настроек и инфраструктура наблюдателей (Observer)."""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field

from domain.models import PreferenceEntry, SummaryText
from shared.constants import (
    PREF_AUTOSYNC,
    PREF_SCREEN_OAUTH,
    PREF_SCREEN_QUESTS,
    PREF_SCREEN_QUESTS_INVALIDATION,
    PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS,
    PREF_THEME,
    SCREEN_EVENT_DIALOG_SHOWN,
    SCREEN_EVENT_ENABLED_CHANGED,
    SCREEN_EVENT_SUMMARY_CHANGED,
    InteractionKind,
)

logger = logging.getLogger(__name__)


class ScreenEvent(str, Enum):
    """События, которые генерирует экран настроек."""

    SUMMARY_CHANGED = SCREEN_EVENT_SUMMARY_CHANGED
    ENABLED_CHANGED = SCREEN_EVENT_ENABLED_CHANGED
    DIALOG_SHOWN = SCREEN_EVENT_DIALOG_SHOWN


class EventData(BaseModel):
    """Базовая структура данных события экрана."""

    event: ScreenEvent
    timestamp: float = Field(default_factory=time.time)
    data: dict[str, object] = Field(default_factory=dict)


class Observer:
    """Базовый интерфейс наблюдателя."""

    def update(self, event_data: EventData) -> None:
        """Обработчик уведомлений (должен быть реализован в наследниках)."""
        msg = 'Метод update должен быть реализован в наследнике'
        raise NotImplementedError(msg)


class Observable:
    """Mixin class to add Observer pattern functionality."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)
            logger.debug(f'Added observer: {observer.__class__.__name__}')

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
            logger.debug(f'Removed observer: {observer.__class__.__name__}')

    def notify_observers(
        self,
        event: ScreenEvent,
        data: dict[str, object] | None = None,
    ) -> None:
        """Notify all observers of an event."""
        event_data = EventData(event=event, data=data or {})
        logger.debug(f'Notifying {len(self._observers)} observers of {event}')

        for observer in self._observers:
            try:
                observer.update(event_data)
            except Exception:
                logger.exception(
                    'Error notifying observer %s',
                    observer.__class__.__name__,
                )


def default_entries() -> list[PreferenceEntry]:
    """Пункты экрана настроек в порядке отображения."""
    return [
        PreferenceEntry(
            key=PREF_SCREEN_OAUTH,
            title='Authorize OSM access',
            interaction=InteractionKind.ACTION,
        ),
        PreferenceEntry(
            key=PREF_SCREEN_QUESTS,
            title='Quest selection',
            interaction=InteractionKind.ACTION,
        ),
        PreferenceEntry(
            key=PREF_SCREEN_QUESTS_INVALIDATION,
            title='Invalidate quest cache',
            interaction=InteractionKind.ACTION,
        ),
        PreferenceEntry(
            key=PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS,
            title='Show notes not phrased as questions',
            interaction=InteractionKind.TOGGLE,
        ),
        PreferenceEntry(
            key=PREF_AUTOSYNC,
            title='Upload answers',
            interaction=InteractionKind.DIALOG,
        ),
        PreferenceEntry(
            key=PREF_THEME,
            title='Theme',
            interaction=InteractionKind.DIALOG,
        ),
    ]


class PreferenceScreen(Observable):
    """Ordered preference entries; every change is broadcast to observers."""

    def __init__(self, entries: list[PreferenceEntry] | None = None) -> None:
        super().__init__()
        self._entries = {e.key: e for e in (entries if entries is not None else default_entries())}
        # Число незавершённых операций, удерживающих пункт выключенным
        self._holds: Counter[str] = Counter()
        self._holds_lock = threading.RLock()
        logger.info('PreferenceScreen initialized with %d entries', len(self._entries))

    @property
    def entries(self) -> list[PreferenceEntry]:
        return list(self._entries.values())

    def find(self, key: str) -> PreferenceEntry | None:
        return self._entries.get(key)

    def require(self, key: str) -> PreferenceEntry:
        entry = self.find(key)
        if entry is None:
            msg = f'Пункт настроек не найден: {key}'
            raise KeyError(msg)
        return entry

    def set_summary(self, key: str, summary: SummaryText | str | None) -> None:
        entry = self.require(key)
        entry.summary = summary
        self.notify_observers(ScreenEvent.SUMMARY_CHANGED, {'key': key, 'summary': summary})

    def set_enabled(self, key: str, *, enabled: bool) -> None:
        entry = self.require(key)
        if entry.enabled == enabled:
            return
        entry.enabled = enabled
        self.notify_observers(ScreenEvent.ENABLED_CHANGED, {'key': key, 'enabled': enabled})

    def hold_disabled(self, key: str) -> None:
        """Disable ``key`` until every hold has been released."""
        self.require(key)
        with self._holds_lock:
            self._holds[key] += 1
            if self._holds[key] == 1:
                self.set_enabled(key, enabled=False)

    def release_disabled(self, key: str) -> None:
        """Release one hold; the entry is enabled again when none remain."""
        with self._holds_lock:
            if self._holds[key] == 0:
                logger.warning('Release without hold for entry %s', key)
                return
            self._holds[key] -= 1
            if self._holds[key] == 0:
                self.set_enabled(key, enabled=True)

    def holds(self, key: str) -> int:
        with self._holds_lock:
            return self._holds[key]
