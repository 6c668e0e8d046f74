# Rev 0.1.0
from __future__ import annotations
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal

from .utils.logging_setup import get_logger


class Session(QObject):
    """
    Credentials for the current user, passed explicitly to the ApiClient.

    Lifecycle: open() after a successful login, invalidate() on logout or
    when the server answers 401. Routing back to the login screen is up to
    whoever listens on ``invalidated``.
    Emits:
      - opened(user: dict)
      - invalidated()
    """

    opened = Signal(dict)
    invalidated = Signal()

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._log = get_logger("Session")
        self._token = token
        self._user = user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._user

    @property
    def role(self) -> Optional[str]:
        return (self._user or {}).get("role")

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def open(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        self._token = token
        self._user = user or {}
        self._log.info("Session opened (role=%s)", self.role)
        self.opened.emit(dict(self._user))

    def invalidate(self) -> None:
        if self._token is None and self._user is None:
            return
        self._token = None
        self._user = None
        self._log.info("Session invalidated")
        self.invalidated.emit()
