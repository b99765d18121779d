"""Settings screen: model, change dispatcher and controller."""
from settings.controller import SettingsController
from settings.dispatcher import PreferenceChangeDispatcher
from settings.screen import (
    EventData,
    Observable,
    Observer,
    PreferenceScreen,
    ScreenEvent,
    default_entries,
)

__all__ = [
    'EventData',
    'Observable',
    'Observer',
    'PreferenceChangeDispatcher',
    'PreferenceScreen',
    'ScreenEvent',
    'SettingsController',
    'default_entries',
]
