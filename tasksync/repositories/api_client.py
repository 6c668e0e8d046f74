# Rev 0.1.0
# tasksync/repositories/api_client.py
from __future__ import annotations
from typing import Any, Dict, Optional

import httpx

from ..errors import RemoteError, SessionExpiredError
from ..session import Session
from ..utils.logging_setup import get_logger


class ApiClient:
    """
    JSON over HTTP against the tracker API.

    Every request carries ``Authorization: Bearer <token>`` taken from the
    Session at call time. A 401 invalidates the session and raises
    SessionExpiredError; any other failure raises RemoteError. Calls are
    attempted once.
    """

    def __init__(
        self,
        base_url: str,
        session: Session,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._log = get_logger("ApiClient")
        self._session = session
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    @property
    def session(self) -> Session:
        return self._session

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---- verbs ----
    async def get(self, path: str) -> Dict[str, Any]:
        return await self.request("GET", path)

    async def post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", path, payload)

    async def put(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", path, payload)

    async def delete(self, path: str) -> Dict[str, Any]:
        return await self.request("DELETE", path)

    async def request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Accept": "application/json"}
        token = self._session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise RemoteError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 401:
            self._log.warning("%s %s -> 401, invalidating session", method, path)
            self._session.invalidate()
            raise SessionExpiredError("Session expired", status=401)
        if response.status_code >= 400:
            raise RemoteError(
                f"{method} {path} -> HTTP {response.status_code}",
                status=response.status_code,
                detail=self._decode(response),
            )
        data = self._decode(response)
        return data if isinstance(data, dict) else {"data": data}

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
