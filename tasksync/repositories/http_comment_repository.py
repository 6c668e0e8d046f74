# Rev 0.1.0
from __future__ import annotations
from typing import Any, Dict

from ..models.entities import Comment
from ..models.payloads import comment_from_payload
from ..models.types import TARGET_TYPES, EntityType
from .api_client import ApiClient


class HttpCommentRepository:
    """Comments against /api/comentarios, targeted by (type, id)."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def create_comment(self, *, target_kind: EntityType, target_id: int, body: str) -> Comment:
        data = await self._api.post("/api/comentarios", {
            "tipo": TARGET_TYPES[target_kind],
            "id_referencia": target_id,
            "cuerpo": body,
        })
        return comment_from_payload(data)

    async def update_comment(self, comment_id: int, *, body: str) -> Dict[str, Any]:
        return await self._api.put(f"/api/comentarios/{comment_id}", {"cuerpo": body})

    async def delete_comment(self, comment_id: int) -> None:
        await self._api.delete(f"/api/comentarios/{comment_id}")
