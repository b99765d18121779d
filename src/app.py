"""Сборка ядра экрана настроек: логирование, хранилища, реестры, контроллер."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from auth.oauth import OAuthPrefs
from config import AppConfig
from prefs.shown_location import ShownLocationProvider
from prefs.store import PreferenceNamespaces
from quests.notes import OsmNoteQuestDao
from quests.visibility_task import ImmediateTaskRunner, ThreadTaskRunner
from settings.controller import SettingsController
from shared.constants import (
    DOWNLOADED_TILES_DB_NAME,
    LOG_FORMAT,
    MAP_PREFS_NAMESPACE,
    NOTE_QUESTS_DB_NAME,
)
from tiles.downloaded import DownloadedTilesRegistry

if TYPE_CHECKING:
    from quests.visibility_task import TaskRunner
    from settings.host import SettingsHost

logger = logging.getLogger(__name__)


def setup_logging(config: AppConfig) -> None:
    """Configure root logging: stdout plus an optional UTF-8 log file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        log_file = Path(config.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


@dataclass
class SettingsSession:
    """Controller together with the collaborators it was wired with."""

    controller: SettingsController
    namespaces: PreferenceNamespaces
    registry: DownloadedTilesRegistry
    notes: OsmNoteQuestDao
    oauth: OAuthPrefs
    shown_location: ShownLocationProvider
    runner: TaskRunner

    def close(self) -> None:
        self.controller.pause()
        if isinstance(self.runner, ThreadTaskRunner):
            self.runner.join()
            self.runner.stop()
        self.registry.close()
        self.notes.close()
        logger.info('Settings session closed')


def create_settings_controller(
    config: AppConfig,
    host: SettingsHost,
    namespaces: PreferenceNamespaces | None = None,
) -> SettingsSession:
    """Wire stores, SQLite registries and the controller; calls ``create()``."""
    namespaces = namespaces or PreferenceNamespaces()
    prefs = namespaces.default
    data_dir = config.data_path
    data_dir.mkdir(parents=True, exist_ok=True)

    registry = DownloadedTilesRegistry(data_dir / DOWNLOADED_TILES_DB_NAME, zoom=config.quest_tile_zoom)
    notes = OsmNoteQuestDao(data_dir / NOTE_QUESTS_DB_NAME)
    oauth = OAuthPrefs(prefs)
    shown_location = ShownLocationProvider(namespaces.get(MAP_PREFS_NAMESPACE))
    runner: TaskRunner = ThreadTaskRunner() if config.run_tasks_in_background else ImmediateTaskRunner()

    controller = SettingsController(
        prefs=prefs,
        authorizer=oauth,
        shown_location=shown_location,
        registry=registry,
        notes=notes,
        host=host,
        runner=runner,
        zoom=config.quest_tile_zoom,
    )
    controller.create()
    logger.info('Settings controller created (data_dir=%s)', data_dir)
    return SettingsSession(
        controller=controller,
        namespaces=namespaces,
        registry=registry,
        notes=notes,
        oauth=oauth,
        shown_location=shown_location,
        runner=runner,
    )
