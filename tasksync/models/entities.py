# Rev 0.1.0
"""In-memory entity tree: Project → Task → Subtask, each with a Comment thread.

The tree is owned by the calling view and mutated in place. Child lists are
plain ``list`` objects so that a reference held elsewhere (e.g. an active
comment target) observes every append/remove made through the tree.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .types import COMMENT_STATUS_SUBMITTED, STATUS_PENDING


@dataclass
class Comment:
    id: int
    body: str
    status: str = COMMENT_STATUS_SUBMITTED
    created_at: Optional[str] = None
    target_type: Optional[str] = None
    target_id: Optional[int] = None
    # transient, only set on copies inside the project-wide feed
    context: Optional[str] = None
    context_kind: Optional[str] = None


@dataclass
class Subtask:
    id: int
    task_id: Optional[int]
    title: str
    description: Optional[str] = None
    status: str = STATUS_PENDING
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    comments: List[Comment] = field(default_factory=list)


@dataclass
class Task:
    id: int
    project_id: Optional[int]
    title: str
    description: Optional[str] = None
    status: str = STATUS_PENDING
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    subtasks: List[Subtask] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)


@dataclass
class Project:
    id: int
    title: str
    description: Optional[str] = None
    status: str = STATUS_PENDING
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    tasks: List[Task] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)

    def find_task(self, task_id: int) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)
