from __future__ import annotations

import logging
from typing import Any, Protocol

from shared.constants import OAUTH_DIALOG_TAG

logger = logging.getLogger(__name__)


class AuthorizationFlow(Protocol):
    def on_callback(self, payload: Any) -> None: ...


class DialogLookup(Protocol):
    def find_dialog(self, tag: str) -> object | None: ...


class AuthorizationCallbackRelay:
    """
    Пересылает внешний колбэк авторизации в открытый диалог авторизации.

    Если диалог не открыт (поток уже завершён или пользователь ушёл с
    экрана), колбэк отбрасывается: это штатная ситуация, а не ошибка.
    """

    def __init__(self, host: DialogLookup, tag: str = OAUTH_DIALOG_TAG) -> None:
        self._host = host
        self._tag = tag

    def on_external_callback(self, payload: Any) -> bool:
        """Forward ``payload`` unchanged; returns whether a flow received it."""
        flow = self._host.find_dialog(self._tag)
        if flow is None:
            logger.debug('No open %s, authorization callback dropped', self._tag)
            return False
        flow.on_callback(payload)
        logger.info('Authorization callback forwarded to %s', self._tag)
        return True
