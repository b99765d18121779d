"""Pytest configuration and fixtures for settings core tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from prefs.store import PreferenceNamespaces  # noqa: E402
from shared.constants import MAP_PREFS_NAMESPACE  # noqa: E402


class RecordingHost:
    """Settings host double that records every request."""

    def __init__(self) -> None:
        self.invalidation_dialogs = []
        self.oauth_dialogs = []
        self.preference_dialogs = []
        self.navigations = 0
        self.open_dialogs: dict[str, object] = {}

    def show_invalidation_dialog(self, dialog) -> None:
        self.invalidation_dialogs.append(dialog)

    def show_oauth_dialog(self, tag: str) -> None:
        self.oauth_dialogs.append(tag)

    def find_dialog(self, tag: str):
        return self.open_dialogs.get(tag)

    def show_preference_dialog(self, key: str, tag: str) -> None:
        self.preference_dialogs.append((key, tag))

    def navigate_to_quest_selection(self) -> None:
        self.navigations += 1


@pytest.fixture
def namespaces():
    return PreferenceNamespaces()


@pytest.fixture
def prefs(namespaces):
    return namespaces.default


@pytest.fixture
def map_prefs(namespaces):
    return namespaces.get(MAP_PREFS_NAMESPACE)


@pytest.fixture
def host():
    return RecordingHost()
