"""Исключения ядра экрана настроек."""


class SettingsError(Exception):
    """Base error of the settings core."""


class ConfigError(SettingsError):
    """Configuration file or environment could not be turned into AppConfig."""


class InvalidDialogStateError(SettingsError):
    """Dialog action requested in a state that does not allow it."""


class InvalidationUnavailableError(SettingsError):
    """'Invalidate here' requested although no shown tile is known."""
