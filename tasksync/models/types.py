# tasksync type definitions
# Rev 0.1.0

from __future__ import annotations
from typing import Literal

# Entity classification hierarchy: project → task → subtask
EntityType = Literal["project", "task", "subtask"]

# Wire values used by the remote service
STATUS_PENDING = "pendiente"
STATUS_COMPLETED = "completado"
COMMENT_STATUS_SUBMITTED = "enviado"

# Comment target type as the comments endpoint expects it
TARGET_TYPES: dict[str, str] = {
    "project": "Proyecto",
    "task": "Tarea",
    "subtask": "Subtarea",
}
