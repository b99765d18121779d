"""Tests for quests.visibility_task."""

import gc
import logging
import threading

import pytest

from domain.models import NoteQuest
from quests.notes import OsmNoteQuestDao
from quests.visibility_task import (
    ApplyNoteVisibilityChangedTask,
    ImmediateTaskRunner,
    ThreadTaskRunner,
)
from settings.screen import PreferenceScreen
from shared.constants import PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS, QuestStatus

KEY = PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS


class DeferredRunner:
    """Keeps submitted tasks until run_all() is called."""

    def __init__(self) -> None:
        self.pending = []

    def submit(self, fn) -> None:
        self.pending.append(fn)

    def run_next(self) -> None:
        self.pending.pop(0)()

    def run_all(self) -> None:
        while self.pending:
            self.pending.pop(0)()


@pytest.fixture
def notes():
    dao = OsmNoteQuestDao()
    dao.add(NoteQuest(note_id=1, status=QuestStatus.NEW, text='Is this open?'))
    dao.add(NoteQuest(note_id=2, status=QuestStatus.NEW, text='Shop closed.'))
    dao.add(NoteQuest(note_id=3, status=QuestStatus.INVISIBLE, text='Still here?'))
    dao.add(NoteQuest(note_id=4, status=QuestStatus.INVISIBLE, text='Bench missing.'))
    dao.add(NoteQuest(note_id=5, status=QuestStatus.ANSWERED, text='Bench broken.'))
    yield dao
    dao.close()


def statuses(dao):
    return {q.note_id: q.status for q in dao.get_all()}


class TestApplyNoteVisibilityChangedTask:
    """Tests for the note visibility task."""

    def test_hide_non_question_notes(self, notes):
        """With the preference off, notes without a question become INVISIBLE."""
        task = ApplyNoteVisibilityChangedTask(notes, show_non_question_notes=False)
        assert task.apply() == 2
        assert statuses(notes) == {
            1: QuestStatus.NEW,
            2: QuestStatus.INVISIBLE,
            3: QuestStatus.NEW,
            4: QuestStatus.INVISIBLE,
            5: QuestStatus.ANSWERED,
        }

    def test_show_non_question_notes(self, notes):
        """With the preference on, every NEW/INVISIBLE note becomes NEW."""
        task = ApplyNoteVisibilityChangedTask(notes, show_non_question_notes=True)
        assert task.apply() == 2
        assert statuses(notes) == {
            1: QuestStatus.NEW,
            2: QuestStatus.NEW,
            3: QuestStatus.NEW,
            4: QuestStatus.NEW,
            5: QuestStatus.ANSWERED,
        }

    def test_idempotent(self, notes):
        """Running twice changes nothing the second time."""
        ApplyNoteVisibilityChangedTask(notes, show_non_question_notes=False).apply()
        assert ApplyNoteVisibilityChangedTask(notes, show_non_question_notes=False).apply() == 0

    def test_entry_disabled_while_running(self, notes):
        """The entry is disabled until the background work has finished."""
        screen = PreferenceScreen()
        runner = DeferredRunner()
        task = ApplyNoteVisibilityChangedTask(notes, True, screen)
        task.execute(runner)
        assert not screen.find(KEY).enabled
        runner.run_all()
        assert screen.find(KEY).enabled
        assert task.changed == 2

    def test_overlapping_tasks_keep_entry_disabled(self, notes):
        """The entry stays disabled until the last submitted task has finished."""
        screen = PreferenceScreen()
        runner = DeferredRunner()
        ApplyNoteVisibilityChangedTask(notes, True, screen).execute(runner)
        ApplyNoteVisibilityChangedTask(notes, False, screen).execute(runner)
        runner.run_next()
        assert not screen.find(KEY).enabled
        runner.run_next()
        assert screen.find(KEY).enabled
        assert statuses(notes)[2] is QuestStatus.INVISIBLE

    def test_destroyed_screen_is_ignored(self, notes):
        """Completing after the screen is gone is a no-op for the UI part."""
        screen = PreferenceScreen()
        runner = DeferredRunner()
        ApplyNoteVisibilityChangedTask(notes, True, screen).execute(runner)
        del screen
        gc.collect()
        runner.run_all()
        assert statuses(notes)[2] is QuestStatus.NEW

    def test_entry_reenabled_after_failure(self):
        """A failing update still re-enables the entry."""
        screen = PreferenceScreen()
        broken = OsmNoteQuestDao()
        broken.close()
        task = ApplyNoteVisibilityChangedTask(broken, True, screen)
        task.execute(ImmediateTaskRunner())
        assert screen.find(KEY).enabled


class TestThreadTaskRunner:
    """Tests for ThreadTaskRunner."""

    def test_runs_off_calling_thread(self):
        """Tasks run on a different thread."""
        seen = []
        runner = ThreadTaskRunner()
        runner.submit(lambda: seen.append(threading.current_thread()))
        runner.join(timeout=5)
        assert seen
        assert seen[0] is not threading.current_thread()

    def test_failure_is_logged(self, caplog):
        """Exceptions are logged in the worker thread, not raised."""

        def boom():
            raise RuntimeError('boom')

        runner = ThreadTaskRunner()
        with caplog.at_level(logging.ERROR, logger='quests.visibility_task'):
            runner.submit(boom)
            runner.join(timeout=5)
        assert 'Background task failed' in caplog.text

    def test_background_task_updates_notes(self, notes):
        """The real task completes on a worker thread."""
        screen = PreferenceScreen()
        runner = ThreadTaskRunner()
        ApplyNoteVisibilityChangedTask(notes, False, screen).execute(runner)
        runner.join(timeout=5)
        assert statuses(notes)[2] is QuestStatus.INVISIBLE
        assert screen.find(KEY).enabled

    def test_tasks_run_serially_in_submission_order(self):
        """A later task starts only after the earlier one has finished."""
        order = []
        release = threading.Event()

        def first():
            release.wait(5)
            order.append('first')

        runner = ThreadTaskRunner()
        runner.submit(first)
        runner.submit(lambda: order.append('second'))
        assert not runner.join(timeout=0.05)
        assert runner.pending == 2
        release.set()
        assert runner.join(timeout=5)
        assert order == ['first', 'second']
        runner.stop()

    def test_last_submitted_value_wins(self, notes):
        """Rapid toggles end in the state of the last change."""
        screen = PreferenceScreen()
        runner = ThreadTaskRunner()
        for show in (False, True, False, True):
            ApplyNoteVisibilityChangedTask(notes, show, screen).execute(runner)
        assert runner.join(timeout=5)
        assert statuses(notes)[2] is QuestStatus.NEW
        assert screen.find(KEY).enabled
        assert screen.holds(KEY) == 0
        runner.stop()

    def test_worker_survives_failure(self):
        """A failing task does not stop later ones."""
        seen = []

        def boom():
            raise RuntimeError('boom')

        runner = ThreadTaskRunner()
        runner.submit(boom)
        runner.submit(lambda: seen.append(1))
        assert runner.join(timeout=5)
        assert seen == [1]
        runner.stop()
