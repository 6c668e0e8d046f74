# Rev 0.1.0
from __future__ import annotations
from typing import Any, Dict

from ..errors import RemoteError
from ..session import Session
from .api_client import ApiClient


class HttpAuthRepository:
    """Login against /api/login; opens the session the client is bound to."""

    def __init__(self, api: ApiClient):
        self._api = api

    @property
    def session(self) -> Session:
        return self._api.session

    async def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._api.post("/api/login", credentials)
        token = data.get("access_token")
        if not token:
            raise RemoteError("Login response carries no access_token", detail=data)
        user = data.get("user") or {}
        self.session.open(token, user)
        return user

    def logout(self) -> None:
        self.session.invalidate()
