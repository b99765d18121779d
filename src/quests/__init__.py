"""Note quests and the background task applying their visibility."""
from quests.notes import OsmNoteQuestDao, probably_contains_question
from quests.visibility_task import (
    ApplyNoteVisibilityChangedTask,
    ImmediateTaskRunner,
    TaskRunner,
    ThreadTaskRunner,
)

__all__ = [
    'ApplyNoteVisibilityChangedTask',
    'ImmediateTaskRunner',
    'OsmNoteQuestDao',
    'TaskRunner',
    'ThreadTaskRunner',
    'probably_contains_question',
]
