"""Preference stores and adapters over their raw values."""
from prefs.shown_location import ShownLocationProvider, bits_to_double, double_to_bits
from prefs.store import PreferenceNamespaces, PreferenceStore

__all__ = [
    'PreferenceNamespaces',
    'PreferenceStore',
    'ShownLocationProvider',
    'bits_to_double',
    'double_to_bits',
]
