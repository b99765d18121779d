"""Tests for config - TOML file, .env and environment overrides."""

import os

import pytest

from config import AppConfig, load_config, save_config
from shared.constants import (
    CONFIG_ENV_DATA_DIR,
    CONFIG_ENV_LOG_LEVEL,
    CONFIG_ENV_PATH,
    DEFAULT_DATA_DIR,
    QUEST_TILE_ZOOM,
)
from shared.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the real environment and working directory."""
    for var in (CONFIG_ENV_PATH, CONFIG_ENV_DATA_DIR, CONFIG_ENV_LOG_LEVEL):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def no_dotenv(tmp_path):
    return tmp_path / 'missing.env'


class TestAppConfig:
    """Tests for the AppConfig model."""

    def test_defaults(self):
        """Defaults match the constants."""
        config = AppConfig()
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.quest_tile_zoom == QUEST_TILE_ZOOM
        assert config.log_file is None
        assert config.run_tasks_in_background

    def test_log_level_normalized(self):
        """Log level is upper-cased."""
        assert AppConfig(log_level='debug').log_level == 'DEBUG'

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValueError):
            AppConfig(log_level='chatty')

    def test_negative_zoom(self):
        """Negative zoom is rejected."""
        with pytest.raises(ValueError):
            AppConfig(quest_tile_zoom=-1)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_gives_defaults(self, tmp_path, no_dotenv):
        """A missing config file is not an error."""
        config = load_config(tmp_path / 'absent.toml', dotenv_path=no_dotenv)
        assert config == AppConfig()

    def test_reads_toml(self, tmp_path, no_dotenv):
        """Values are read from the TOML file; unknown keys are ignored."""
        path = tmp_path / 'questmap.toml'
        path.write_text(
            'data_dir = "/var/questmap"\nlog_level = "warning"\nunknown = 1\n',
            encoding='utf-8',
        )
        config = load_config(path, dotenv_path=no_dotenv)
        assert config.data_dir == '/var/questmap'
        assert config.log_level == 'WARNING'

    def test_default_file_in_cwd(self, tmp_path, no_dotenv):
        """Without a path, questmap.toml in the current directory is used."""
        (tmp_path / 'questmap.toml').write_text('quest_tile_zoom = 15\n', encoding='utf-8')
        assert load_config(dotenv_path=no_dotenv).quest_tile_zoom == 15

    def test_path_from_environment(self, tmp_path, monkeypatch, no_dotenv):
        """QUESTMAP_CONFIG points to the config file."""
        path = tmp_path / 'custom.toml'
        path.write_text('run_tasks_in_background = false\n', encoding='utf-8')
        monkeypatch.setenv(CONFIG_ENV_PATH, str(path))
        assert not load_config(dotenv_path=no_dotenv).run_tasks_in_background

    def test_environment_overrides_file(self, tmp_path, monkeypatch, no_dotenv):
        """Environment variables win over the file."""
        path = tmp_path / 'questmap.toml'
        path.write_text('data_dir = "from-file"\n', encoding='utf-8')
        monkeypatch.setenv(CONFIG_ENV_DATA_DIR, 'from-env')
        monkeypatch.setenv(CONFIG_ENV_LOG_LEVEL, 'error')
        config = load_config(path, dotenv_path=no_dotenv)
        assert config.data_dir == 'from-env'
        assert config.log_level == 'ERROR'

    def test_dotenv_file(self, tmp_path):
        """Variables from a .env file are applied."""
        env_file = tmp_path / '.env'
        env_file.write_text(f'{CONFIG_ENV_DATA_DIR}=from-dotenv\n', encoding='utf-8')
        try:
            config = load_config(tmp_path / 'absent.toml', dotenv_path=env_file)
        finally:
            os.environ.pop(CONFIG_ENV_DATA_DIR, None)
        assert config.data_dir == 'from-dotenv'

    def test_malformed_toml(self, tmp_path, no_dotenv):
        """Broken TOML raises ConfigError."""
        path = tmp_path / 'questmap.toml'
        path.write_text('data_dir = \n', encoding='utf-8')
        with pytest.raises(ConfigError):
            load_config(path, dotenv_path=no_dotenv)

    def test_invalid_value(self, tmp_path, no_dotenv):
        """Invalid values raise ConfigError."""
        path = tmp_path / 'questmap.toml'
        path.write_text('log_level = "loud"\n', encoding='utf-8')
        with pytest.raises(ConfigError):
            load_config(path, dotenv_path=no_dotenv)


class TestSaveConfig:
    """Tests for save_config()."""

    def test_save_and_load(self, tmp_path, no_dotenv):
        """A saved config loads back equal."""
        config = AppConfig(data_dir='data', log_level='DEBUG', quest_tile_zoom=16)
        path = save_config(config, tmp_path / 'out.toml')
        assert load_config(path, dotenv_path=no_dotenv) == config

    def test_none_values_skipped(self, tmp_path):
        """None values are not written."""
        path = save_config(AppConfig(), tmp_path / 'out.toml')
        assert 'log_file' not in path.read_text(encoding='utf-8')
