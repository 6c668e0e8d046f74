# Rev 0.1.0
# tasksync – HttpProjectRepository (Rev 0.1.0)
from __future__ import annotations
from typing import Any, Dict

from ..models.entities import Project
from ..models.payloads import project_from_payload, to_wire
from .api_client import ApiClient


class HttpProjectRepository:
    """
    Project resource (/api/proyectos).
    Updates take entity attribute names and send the wire subset.
    """

    def __init__(self, api: ApiClient):
        self._api = api

    async def get_project(self, project_id: int) -> Project:
        return project_from_payload(await self._api.get(f"/api/proyectos/{project_id}"))

    async def update_project(self, project_id: int, **fields: Any) -> Dict[str, Any]:
        return await self._api.put(f"/api/proyectos/{project_id}", to_wire(fields))

    async def delete_project(self, project_id: int) -> None:
        await self._api.delete(f"/api/proyectos/{project_id}")
