"""In-memory preference store with change listeners.

The store is the application's shared key/value settings collaborator. Each
mutation, whatever its origin (user edit, programmatic ``set``, ``restore``),
notifies every registered listener with the changed key.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from shared.constants import DEFAULT_PREFS_NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    PreferenceListener = Callable[[str], None]

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Thread-safe key/value store.

    Usage:
        store = PreferenceStore()
        store.register_listener(on_change)
        store.set('osm.username', 'alice')   # on_change('osm.username')
        store.unregister_listener(on_change)
    """

    def __init__(self, name: str = DEFAULT_PREFS_NAMESPACE) -> None:
        self.name = name
        self._values: dict[str, Any] = {}
        self._listeners: list[PreferenceListener] = []
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._values)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value
        self._notify(key)

    def remove(self, key: str) -> None:
        with self._lock:
            if key not in self._values:
                return
            del self._values[key]
        self._notify(key)

    def restore(self, values: Mapping[str, Any]) -> None:
        """Replace all values (e.g. from a backup); notifies once per touched key."""
        with self._lock:
            touched = set(self._values) | set(values)
            self._values = dict(values)
        for key in sorted(touched):
            self._notify(key)

    def register_listener(self, listener: PreferenceListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)
                logger.debug('Store %s: listener registered', self.name)

    def unregister_listener(self, listener: PreferenceListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                logger.debug('Store %s: listener unregistered', self.name)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _notify(self, key: str) -> None:
        with self._lock:
            listeners: Iterable[PreferenceListener] = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(key)
            except Exception:
                logger.exception('Error notifying preference listener for %s', key)


class PreferenceNamespaces:
    """Hands out one named store per namespace (default, map_fragment, ...)."""

    def __init__(self) -> None:
        self._stores: dict[str, PreferenceStore] = {}
        self._lock = threading.Lock()

    def get(self, name: str = DEFAULT_PREFS_NAMESPACE) -> PreferenceStore:
        with self._lock:
            if name not in self._stores:
                self._stores[name] = PreferenceStore(name)
            return self._stores[name]

    @property
    def default(self) -> PreferenceStore:
        return self.get(DEFAULT_PREFS_NAMESPACE)
