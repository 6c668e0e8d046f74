# Rev 0.1.0
from __future__ import annotations
from typing import Any, Dict, Optional

from ..models.entities import Subtask
from ..models.payloads import subtask_from_payload, to_wire
from ..models.types import STATUS_PENDING
from .api_client import ApiClient


class HttpSubtaskRepository:
    """Subtask CRUD against /api/subtareas."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def create_subtask(
        self,
        *,
        task_id: int,
        title: str,
        description: Optional[str] = "",
        status: str = STATUS_PENDING,
    ) -> Subtask:
        data = await self._api.post("/api/subtareas", {
            "idTarea": task_id,
            "titulo": title,
            "descripcion": description or "",
            "estado": status,
        })
        subtask = subtask_from_payload(data, task_id)
        subtask.comments = []
        return subtask

    async def update_subtask(self, subtask_id: int, **fields: Any) -> Dict[str, Any]:
        return await self._api.put(f"/api/subtareas/{subtask_id}", to_wire(fields))

    async def delete_subtask(self, subtask_id: int) -> None:
        await self._api.delete(f"/api/subtareas/{subtask_id}")
