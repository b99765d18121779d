"""OAuth credentials kept in the preference store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.models import AuthorizationState
from shared.constants import (
    PREF_OAUTH_ACCESS_TOKEN,
    PREF_OAUTH_ACCESS_TOKEN_SECRET,
    PREF_OSM_USER_NAME,
)

if TYPE_CHECKING:
    from prefs.store import PreferenceStore

logger = logging.getLogger(__name__)


class OAuthPrefs:
    """
    Состояние авторизации поверх хранилища настроек.

    Авторизованным считается пользователь, у которого сохранены и токен,
    и секрет. Имя пользователя хранится отдельно и может отсутствовать,
    даже если авторизация уже выполнена.
    """

    def __init__(self, prefs: PreferenceStore) -> None:
        self._prefs = prefs

    def is_authorized(self) -> bool:
        return bool(self._prefs.get(PREF_OAUTH_ACCESS_TOKEN)) and bool(
            self._prefs.get(PREF_OAUTH_ACCESS_TOKEN_SECRET),
        )

    def username(self) -> str | None:
        return self._prefs.get(PREF_OSM_USER_NAME)

    def state(self) -> AuthorizationState:
        return AuthorizationState(is_authorized=self.is_authorized(), username=self.username())

    def save_consumer(self, token: str, secret: str) -> None:
        """Store access credentials; the secret is written last so listeners see a complete pair."""
        self._prefs.set(PREF_OAUTH_ACCESS_TOKEN, token)
        self._prefs.set(PREF_OAUTH_ACCESS_TOKEN_SECRET, secret)
        logger.info('OAuth credentials saved')

    def clear(self) -> None:
        self._prefs.remove(PREF_OAUTH_ACCESS_TOKEN)
        self._prefs.remove(PREF_OAUTH_ACCESS_TOKEN_SECRET)
        self._prefs.remove(PREF_OSM_USER_NAME)
        logger.info('OAuth credentials cleared')
