# Rev 0.1.0
# tasksync/errors.py
from __future__ import annotations
from typing import Any, Optional


class TaskSyncError(RuntimeError):
    pass


class RemoteError(TaskSyncError):
    """A remote call was rejected or never reached the server."""

    def __init__(self, message: str, *, status: Optional[int] = None, detail: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class SessionExpiredError(RemoteError):
    """HTTP 401: the session has been invalidated by the client."""
