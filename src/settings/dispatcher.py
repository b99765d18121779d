"""Reaction to preference changes while the settings screen is active."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from shared.constants import (
    PREF_OAUTH_ACCESS_TOKEN_SECRET,
    PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from prefs.store import PreferenceStore
    from quests.visibility_task import TaskRunner


logger = logging.getLogger(__name__)


class SummaryRefresher(Protocol):
    def refresh(self) -> object: ...


class PendingTask(Protocol):
    def execute(self, runner: TaskRunner) -> None: ...


class PreferenceChangeDispatcher:
    """
    Маршрутизирует изменения настроек.

    - секрет OAuth-токена: пересчитать сводку авторизации;
    - видимость заметок: создать и запустить новую фоновую задачу,
      привязанную к текущему значению (без дедупликации и отмены
      предыдущих задач);
    - остальные ключи игнорируются.
    """

    def __init__(
        self,
        prefs: PreferenceStore,
        presenter: SummaryRefresher,
        task_factory: Callable[[bool], PendingTask],
        runner: TaskRunner,
    ) -> None:
        self._prefs = prefs
        self._presenter = presenter
        self._task_factory = task_factory
        self._runner = runner

    def on_change(self, key: str) -> None:
        if key == PREF_OAUTH_ACCESS_TOKEN_SECRET:
            self._presenter.refresh()
        elif key == PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS:
            value = bool(self._prefs.get(PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS, False))
            task = self._task_factory(value)
            logger.info('Scheduling note visibility task (show=%s)', value)
            task.execute(self._runner)
        else:
            logger.debug('Preference change ignored: %s', key)
