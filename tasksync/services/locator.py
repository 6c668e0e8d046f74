# Rev 0.1.0
"""Find a Comment anywhere in a project tree.

Search order is fixed: project comments, then for each task its own
comments followed by the comments of each of its subtasks. Comment ids are
assumed unique across the tree; with duplicates only the first hit in this
order is ever returned.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from ..models.entities import Comment, Project, Subtask, Task
from ..models.types import EntityType

Owner = Union[Project, Task, Subtask]


def iter_comment_owners(project: Project) -> Iterator[Tuple[EntityType, Owner, List[Comment]]]:
    """Yield (kind, owner, comments) in locator order."""
    yield "project", project, project.comments
    for task in project.tasks:
        yield "task", task, task.comments
        for subtask in task.subtasks:
            yield "subtask", subtask, subtask.comments


@dataclass
class CommentHandle:
    """Mutable handle: the owning list itself plus the position in it."""
    kind: EntityType
    owner: Owner
    collection: List[Comment]
    index: int

    @property
    def comment(self) -> Comment:
        return self.collection[self.index]

    def replace(self, comment: Comment) -> None:
        self.collection[self.index] = comment

    def remove(self) -> Comment:
        return self.collection.pop(self.index)


def locate_comment(project: Project, comment_id: int) -> Optional[CommentHandle]:
    for kind, owner, comments in iter_comment_owners(project):
        for index, comment in enumerate(comments):
            if comment.id == comment_id:
                return CommentHandle(kind, owner, comments, index)
    return None
