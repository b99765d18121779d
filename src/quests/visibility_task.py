"""
Фоновая задача применения настройки видимости заметок.

Создаётся заново на каждое изменение настройки ``display.nonQuestionNotes``
(без дедупликации и отмены) и выполняется вне потока обработки событий.
Задачи выполняются строго по очереди в порядке отправки, поэтому итоговое
состояние заметок соответствует последнему изменению настройки.
Пункт настроек остаётся выключенным, пока не завершится последняя из
отправленных задач; если экран к этому моменту уже уничтожен,
разблокировка просто пропускается.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
import weakref
from typing import TYPE_CHECKING, Protocol

from quests.notes import probably_contains_question
from shared.constants import (
    NOTE_VISIBILITY_THREAD_NAME,
    PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS,
    QuestStatus,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from quests.notes import OsmNoteQuestDao
    from settings.screen import PreferenceScreen

logger = logging.getLogger(__name__)


class TaskRunner(Protocol):
    def submit(self, fn: Callable[[], None]) -> None: ...


class ThreadTaskRunner:
    """Serial background executor.

    A single daemon worker thread takes tasks from a queue and runs them
    one after another in submission order. Failures are logged and do not
    stop the worker.
    """

    def __init__(self, name: str = NOTE_VISIBILITY_THREAD_NAME) -> None:
        self._name = name
        self._queue: queue.Queue[Callable[[], None] | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._start_lock = threading.Lock()
        # Число отправленных, но ещё не завершённых задач
        self._pending = 0
        self._idle = threading.Condition()

    def submit(self, fn: Callable[[], None]) -> None:
        with self._idle:
            self._pending += 1
        self._ensure_started()
        self._queue.put(fn)

    def join(self, timeout: float | None = None) -> bool:
        """Wait until every submitted task has finished.

        Args:
            timeout: Maximum time to wait in seconds; ``None`` waits forever.

        Returns:
            True if the runner is idle, False if the timeout expired first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._idle:
            while self._pending:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._idle.wait(remaining)
        return True

    def stop(self, timeout: float = 30.0) -> None:
        """Finish queued tasks and stop the worker thread."""
        if self._thread is None:
            return
        self._queue.put(None)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning('Task runner thread %s did not stop within timeout', self._name)
        self._thread = None

    @property
    def pending(self) -> int:
        with self._idle:
            return self._pending

    def _ensure_started(self) -> None:
        with self._start_lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._thread = threading.Thread(target=self._worker_loop, daemon=True, name=self._name)
            self._thread.start()

    def _worker_loop(self) -> None:
        while True:
            fn = self._queue.get()
            # None signals shutdown
            if fn is None:
                return
            try:
                fn()
            except Exception:
                logger.exception('Background task failed')
            finally:
                with self._idle:
                    self._pending -= 1
                    self._idle.notify_all()


class ImmediateTaskRunner:
    """Runs tasks inline on the calling thread."""

    def submit(self, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            logger.exception('Task failed')


class ApplyNoteVisibilityChangedTask:
    """Shows or hides note quests that are not phrased as questions."""

    def __init__(
        self,
        notes: OsmNoteQuestDao,
        show_non_question_notes: bool,
        screen: PreferenceScreen | None = None,
        key: str = PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS,
    ) -> None:
        self._notes = notes
        self.show_non_question_notes = show_non_question_notes
        self._key = key
        self._screen_ref = weakref.ref(screen) if screen is not None else None
        self.changed = 0

    def execute(self, runner: TaskRunner) -> None:
        screen = self._screen()
        if screen is not None:
            screen.hold_disabled(self._key)
        runner.submit(self.run)

    def run(self) -> None:
        try:
            self.changed = self.apply()
        finally:
            screen = self._screen()
            if screen is not None:
                screen.release_disabled(self._key)

    def apply(self) -> int:
        """Update statuses of NEW/INVISIBLE note quests; returns number changed."""
        changed = 0
        for quest in self._notes.get_all([QuestStatus.NEW, QuestStatus.INVISIBLE]):
            visible = self.show_non_question_notes or probably_contains_question(quest.text)
            status = QuestStatus.NEW if visible else QuestStatus.INVISIBLE
            if quest.status is not status:
                quest.status = status
                self._notes.update(quest)
                changed += 1
        logger.info(
            'Note visibility applied (show_non_question_notes=%s): %d quests changed',
            self.show_non_question_notes,
            changed,
        )
        return changed

    def _screen(self) -> PreferenceScreen | None:
        screen = self._screen_ref() if self._screen_ref is not None else None
        if screen is None or screen.find(self._key) is None:
            return None
        return screen
