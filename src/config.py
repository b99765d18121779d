"""Конфигурация приложения: TOML-файл + переопределения из окружения (.env)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import tomlkit
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator
from tomlkit.exceptions import ParseError

from shared.constants import (
    CONFIG_ENV_DATA_DIR,
    CONFIG_ENV_LOG_LEVEL,
    CONFIG_ENV_PATH,
    CONFIG_FILE_NAME,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    QUEST_TILE_ZOOM,
)
from shared.errors import ConfigError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {'CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'}


class AppConfig(BaseModel):
    """Settings of the settings core itself (not user preferences)."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние ключи из файла
    }

    # Каталог SQLite-баз (загруженные тайлы, квесты-заметки)
    data_dir: str = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    # Файл лога; None - только stdout
    log_file: str | None = None
    # Зум тайлов кэша квестов, должен совпадать с зумом загрузки
    quest_tile_zoom: int = QUEST_TILE_ZOOM
    # Запускать задачу видимости заметок в фоновом потоке
    run_tasks_in_background: bool = True

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = str(v).upper()
        if v not in _LOG_LEVELS:
            msg = f'Неизвестный уровень логирования: {v}'
            raise ValueError(msg)
        return v

    @field_validator('quest_tile_zoom')
    @classmethod
    def validate_zoom(cls, v: int) -> int:
        v = int(v)
        if v < 0:
            msg = 'quest_tile_zoom не может быть отрицательным'
            raise ValueError(msg)
        return v

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)


def load_config(path: str | Path | None = None, *, dotenv_path: str | Path | None = None) -> AppConfig:
    """
    Загрузка конфигурации.

    Порядок: значения по умолчанию → TOML-файл → переменные окружения
    (в том числе из .env). Путь к файлу берётся из аргумента, затем из
    ``QUESTMAP_CONFIG``, затем ``questmap.toml`` в текущем каталоге;
    отсутствующий файл не считается ошибкой.
    """
    load_dotenv(dotenv_path)

    config_path = Path(path or os.getenv(CONFIG_ENV_PATH) or CONFIG_FILE_NAME)
    data: dict[str, object] = {}
    if config_path.exists():
        try:
            data = tomlkit.parse(config_path.read_text(encoding='utf-8')).unwrap()
        except ParseError as e:
            msg = f'Не удалось разобрать {config_path}: {e}'
            raise ConfigError(msg) from e
        logger.info('Config loaded from %s', config_path)
    else:
        logger.debug('Config file %s not found, using defaults', config_path)

    if data_dir := os.getenv(CONFIG_ENV_DATA_DIR):
        data['data_dir'] = data_dir
    if log_level := os.getenv(CONFIG_ENV_LOG_LEVEL):
        data['log_level'] = log_level

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        msg = f'Некорректная конфигурация: {e}'
        raise ConfigError(msg) from e


def save_config(config: AppConfig, path: str | Path) -> Path:
    """Сохранение конфигурации в TOML (None-значения пропускаются)."""
    path = Path(path)
    data = {k: v for k, v in config.model_dump().items() if v is not None}
    path.write_text(tomlkit.dumps(data), encoding='utf-8')
    return path
