"""SQLite storage of note quests.

A note quest asks the user to look at an OSM note. Notes that do not look
like a question are hidden (INVISIBLE) unless the user opted to see them.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from domain.models import NoteQuest
from shared.constants import QUESTION_MARKS, QuestStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_MEMORY = ':memory:'


def probably_contains_question(text: str) -> bool:
    """Whether ``text`` contains a question mark of any script.

    Some languages (e.g. Thai) use no question mark at all, so this is only
    a heuristic.
    """
    return any(mark in text for mark in QUESTION_MARKS)


class OsmNoteQuestDao:
    """Note quest table (note_id, status, text).

    Usage:
        dao = OsmNoteQuestDao('note_quests.db')
        dao.add(NoteQuest(note_id=1, text='Is this shop still open?'))
        for quest in dao.get_all([QuestStatus.NEW]):
            ...
        dao.close()
    """

    def __init__(self, db_path: str | Path = _MEMORY) -> None:
        if str(db_path) != _MEMORY:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.db_path = str(db_path)
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.executescript('''
            CREATE TABLE IF NOT EXISTS osm_note_quests (
                note_id INTEGER PRIMARY KEY,
                status TEXT NOT NULL,
                text TEXT NOT NULL DEFAULT ''
            );

            CREATE INDEX IF NOT EXISTS idx_note_quests_status ON osm_note_quests(status);
        ''')
        self._conn.commit()
        logger.info('OsmNoteQuestDao initialized at %s', self.db_path)

    def add(self, quest: NoteQuest) -> None:
        with self._lock:
            self._conn.execute(
                'INSERT OR REPLACE INTO osm_note_quests (note_id, status, text) VALUES (?, ?, ?)',
                (quest.note_id, quest.status.value, quest.text),
            )
            self._conn.commit()

    def get(self, note_id: int) -> NoteQuest | None:
        with self._lock:
            row = self._conn.execute(
                'SELECT note_id, status, text FROM osm_note_quests WHERE note_id = ?',
                (note_id,),
            ).fetchone()
        if row is None:
            return None
        return NoteQuest(note_id=row[0], status=QuestStatus(row[1]), text=row[2])

    def get_all(self, statuses: Iterable[QuestStatus] | None = None) -> list[NoteQuest]:
        query = 'SELECT note_id, status, text FROM osm_note_quests'
        params: tuple[str, ...] = ()
        if statuses is not None:
            params = tuple(s.value for s in statuses)
            if not params:
                return []
            query += f' WHERE status IN ({", ".join("?" * len(params))})'
        query += ' ORDER BY note_id'
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [NoteQuest(note_id=r[0], status=QuestStatus(r[1]), text=r[2]) for r in rows]

    def update(self, quest: NoteQuest) -> bool:
        """Write the quest's status and text; returns False if it does not exist."""
        with self._lock:
            cursor = self._conn.execute(
                'UPDATE osm_note_quests SET status = ?, text = ? WHERE note_id = ?',
                (quest.status.value, quest.text, quest.note_id),
            )
            self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info('OsmNoteQuestDao closed')

    def __enter__(self) -> OsmNoteQuestDao:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
