# Rev 0.1.0
# tasksync/models/payloads.py
"""Server JSON ⇄ entity translation.

The remote service speaks Spanish field names (titulo, descripcion,
fecha_inicio, fecha_limite, estado, cuerpo, subtareas). Everything else in
the package uses the entity attributes.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from .entities import Comment, Project, Subtask, Task
from .types import COMMENT_STATUS_SUBMITTED, STATUS_PENDING

# entity attribute -> wire field
FIELD_NAMES: Dict[str, str] = {
    "title": "titulo",
    "description": "descripcion",
    "start_date": "fecha_inicio",
    "due_date": "fecha_limite",
    "status": "estado",
    "body": "cuerpo",
}


def to_wire(values: Dict[str, Any]) -> Dict[str, Any]:
    """Rename entity attributes to their wire names; unknown keys pass through."""
    return {FIELD_NAMES.get(k, k): v for k, v in values.items()}


def from_wire(payload: Dict[str, Any], attrs: Iterable[str]) -> Dict[str, Any]:
    """Pick ``attrs`` out of a server payload, keyed by entity attribute."""
    out: Dict[str, Any] = {}
    for attr in attrs:
        wire = FIELD_NAMES.get(attr, attr)
        if wire in payload:
            out[attr] = payload[wire]
    return out


def _first(payload: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if payload.get(k) is not None:
            return payload[k]
    return None


def comment_from_payload(payload: Dict[str, Any]) -> Comment:
    return Comment(
        id=payload["id"],
        body=payload.get("cuerpo") or "",
        # the create endpoint may omit it; a fresh comment counts as submitted
        status=payload.get("estado") or COMMENT_STATUS_SUBMITTED,
        created_at=payload.get("created_at"),
        target_type=payload.get("tipo"),
        target_id=payload.get("id_referencia"),
    )


def _comments(payload: Dict[str, Any]) -> List[Comment]:
    return [comment_from_payload(c) for c in (payload.get("comments") or [])]


def subtask_from_payload(payload: Dict[str, Any], task_id: Optional[int] = None) -> Subtask:
    return Subtask(
        id=payload["id"],
        task_id=_first(payload, "idTarea", "id_tarea", "task_id") or task_id,
        title=payload.get("titulo") or "",
        description=payload.get("descripcion"),
        status=payload.get("estado") or STATUS_PENDING,
        start_date=payload.get("fecha_inicio"),
        due_date=payload.get("fecha_limite"),
        comments=_comments(payload),
    )


def task_from_payload(payload: Dict[str, Any], project_id: Optional[int] = None) -> Task:
    task = Task(
        id=payload["id"],
        project_id=_first(payload, "idProyecto", "id_proyecto", "project_id") or project_id,
        title=payload.get("titulo") or "",
        description=payload.get("descripcion"),
        status=payload.get("estado") or STATUS_PENDING,
        start_date=payload.get("fecha_inicio"),
        due_date=payload.get("fecha_limite"),
        comments=_comments(payload),
    )
    task.subtasks = [subtask_from_payload(s, task.id) for s in (payload.get("subtareas") or [])]
    return task


def project_from_payload(payload: Dict[str, Any]) -> Project:
    """Build a full tree from a project payload (tasks → subtareas → comments)."""
    project = Project(
        id=payload["id"],
        title=payload.get("titulo") or "",
        description=payload.get("descripcion"),
        status=payload.get("estado") or STATUS_PENDING,
        start_date=payload.get("fecha_inicio"),
        due_date=payload.get("fecha_limite"),
        comments=_comments(payload),
    )
    project.tasks = [task_from_payload(t, project.id) for t in (payload.get("tasks") or [])]
    return project
