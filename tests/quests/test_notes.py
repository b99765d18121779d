"""Tests for quests.notes."""

import pytest

from domain.models import NoteQuest
from quests.notes import OsmNoteQuestDao, probably_contains_question
from shared.constants import QuestStatus


@pytest.fixture
def dao():
    d = OsmNoteQuestDao()
    yield d
    d.close()


class TestProbablyContainsQuestion:
    """Tests for the question heuristic."""

    @pytest.mark.parametrize(
        'text',
        [
            'Is this shop still open?',
            'Είναι ανοιχτό\u037e',  # Greek question mark
            'Είναι ανοιχτό;',  # semicolon used instead
            'هل هذا مفتوح؟',
            'Բաց է՞',
            'ክፍት ነው፧',
            '还开着吗？',
        ],
    )
    def test_question_marks_of_many_scripts(self, text):
        """Question marks of several scripts count."""
        assert probably_contains_question(text)

    @pytest.mark.parametrize('text', ['', 'Shop closed.', 'ร้านปิดแล้ว'])
    def test_no_question_mark(self, text):
        """Texts without a question mark are not questions."""
        assert not probably_contains_question(text)


class TestOsmNoteQuestDao:
    """Tests for OsmNoteQuestDao."""

    def test_add_and_get(self, dao):
        """A stored quest is read back."""
        dao.add(NoteQuest(note_id=1, text='Open?'))
        assert dao.get(1) == NoteQuest(note_id=1, status=QuestStatus.NEW, text='Open?')
        assert dao.get(2) is None

    def test_get_all_filters_by_status(self, dao):
        """get_all() filters by the given statuses."""
        dao.add(NoteQuest(note_id=1, status=QuestStatus.NEW))
        dao.add(NoteQuest(note_id=2, status=QuestStatus.INVISIBLE))
        dao.add(NoteQuest(note_id=3, status=QuestStatus.ANSWERED))
        ids = [q.note_id for q in dao.get_all([QuestStatus.NEW, QuestStatus.INVISIBLE])]
        assert ids == [1, 2]
        assert len(dao.get_all()) == 3
        assert dao.get_all([]) == []

    def test_update(self, dao):
        """update() writes the status; unknown ids report False."""
        dao.add(NoteQuest(note_id=1))
        assert dao.update(NoteQuest(note_id=1, status=QuestStatus.INVISIBLE))
        assert dao.get(1).status is QuestStatus.INVISIBLE
        assert not dao.update(NoteQuest(note_id=99))
