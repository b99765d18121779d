from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from domain.models import AuthorizationState, SummaryText
from shared.constants import PREF_OSM_USER_NAME, PREF_SCREEN_OAUTH

if TYPE_CHECKING:
    from prefs.store import PreferenceStore
    from settings.screen import PreferenceScreen

logger = logging.getLogger(__name__)


class Authorizer(Protocol):
    def is_authorized(self) -> bool: ...


def summarize(state: AuthorizationState, username: str | None) -> SummaryText:
    """Authorization summary.

    ``state.is_authorized`` and ``username`` are independent: a user may be
    authorized before the username has been fetched.
    """
    if not state.is_authorized:
        return SummaryText.not_authorized()
    if username is not None:
        return SummaryText.authorized_with_username(username)
    return SummaryText.authorized()


class AuthorizationStatusPresenter:
    """Pushes the current authorization summary onto the 'oauth' entry."""

    def __init__(
        self,
        authorizer: Authorizer,
        prefs: PreferenceStore,
        screen: PreferenceScreen,
    ) -> None:
        self._authorizer = authorizer
        self._prefs = prefs
        self._screen = screen

    def refresh(self) -> SummaryText:
        username = self._prefs.get(PREF_OSM_USER_NAME)
        state = AuthorizationState(is_authorized=self._authorizer.is_authorized(), username=username)
        summary = summarize(state, username)
        self._screen.set_summary(PREF_SCREEN_OAUTH, summary)
        logger.debug('Authorization summary refreshed: %s', summary.kind.value)
        return summary
