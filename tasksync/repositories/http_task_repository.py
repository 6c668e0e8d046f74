# Rev 0.1.0
from __future__ import annotations
from typing import Any, Dict, Optional

from ..models.entities import Task
from ..models.payloads import task_from_payload, to_wire
from ..models.types import STATUS_PENDING
from .api_client import ApiClient


class HttpTaskRepository:
    """
    Task CRUD against /api/tareas.
    create_task returns the server entity with empty subtask/comment lists.
    """

    def __init__(self, api: ApiClient):
        self._api = api

    async def create_task(
        self,
        *,
        project_id: int,
        title: str,
        description: Optional[str] = "",
        status: str = STATUS_PENDING,
    ) -> Task:
        data = await self._api.post("/api/tareas", {
            "idProyecto": project_id,
            "titulo": title,
            "descripcion": description or "",
            "estado": status,
        })
        task = task_from_payload(data, project_id)
        task.subtasks = []
        task.comments = []
        return task

    async def update_task(self, task_id: int, **fields: Any) -> Dict[str, Any]:
        return await self._api.put(f"/api/tareas/{task_id}", to_wire(fields))

    async def delete_task(self, task_id: int) -> None:
        await self._api.delete(f"/api/tareas/{task_id}")
