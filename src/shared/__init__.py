"""Shared constants and errors."""
from shared.errors import (
    ConfigError,
    InvalidationUnavailableError,
    InvalidDialogStateError,
    SettingsError,
)

__all__ = [
    'ConfigError',
    'InvalidDialogStateError',
    'InvalidationUnavailableError',
    'SettingsError',
]
