from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tiles.invalidation import InvalidationDialog


class SettingsHost(Protocol):
    """Окно-хозяин экрана настроек: показывает диалоги и переключает экраны."""

    def show_invalidation_dialog(self, dialog: InvalidationDialog) -> None:
        """Show 'here / everywhere / cancel'; 'here' greyed out unless ``dialog.here_enabled``."""

    def show_oauth_dialog(self, tag: str) -> None: ...

    def find_dialog(self, tag: str) -> object | None: ...

    def show_preference_dialog(self, key: str, tag: str) -> None: ...

    def navigate_to_quest_selection(self) -> None: ...
