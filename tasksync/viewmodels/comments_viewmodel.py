# Rev 0.1.0
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import Comment, Project, Subtask, Task
from ..models.types import EntityType
from ..repositories.http_comment_repository import HttpCommentRepository
from ..services.comment_feed import aggregate_project_comments
from ..services.locator import locate_comment
from ..services.optimistic import MutationResult, OptimisticMutator, attrs
from ..utils.logging_setup import get_logger

PROJECT_FEED_TITLE = "All comments"


@dataclass
class ActiveTarget:
    """The comment thread being viewed. ``comments`` is the owner's own list."""
    kind: EntityType
    id: int
    title: str
    comments: List[Comment]


class CommentsViewModel(QObject):
    """
    Comment panel state: which thread is active and what to display, plus
    send / edit / delete. Edits and deletes locate the comment in the
    project tree, so they work the same from the project-wide feed.
    Emits:
      - activeTargetChanged(target or None)
      - commentsChanged()
      - sendingChanged(bool)
    """

    activeTargetChanged = Signal(object)
    commentsChanged = Signal()
    sendingChanged = Signal(bool)

    def __init__(self, project: Project, comments_repo: HttpCommentRepository, mutator: OptimisticMutator):
        super().__init__()
        self._project = project
        self._repo = comments_repo
        self._mutator = mutator
        self._log = get_logger("CommentsViewModel")
        self._target: Optional[ActiveTarget] = None
        self._sending = False

    @property
    def active_target(self) -> Optional[ActiveTarget]:
        return self._target

    @property
    def is_sending(self) -> bool:
        return self._sending

    # ---- target selection ----
    def init_project_comments(self) -> None:
        self.view_project_comments()

    def view_project_comments(self) -> None:
        p = self._project
        self._set_target(ActiveTarget("project", p.id, PROJECT_FEED_TITLE, p.comments))

    def view_task_comments(self, task: Task) -> None:
        self._set_target(ActiveTarget("task", task.id, task.title, task.comments))

    def view_subtask_comments(self, subtask: Subtask) -> None:
        self._set_target(ActiveTarget("subtask", subtask.id, subtask.title, subtask.comments))

    def reset(self) -> None:
        self._set_target(None)

    def displayed_comments(self) -> List[Comment]:
        target = self._target
        if target is None:
            return []
        if target.kind == "project":
            return aggregate_project_comments(self._project)
        return target.comments

    # ---- commands ----
    async def send_comment(self, text: str) -> MutationResult:
        target = self._target
        body = (text or "").strip()
        if target is None or not body:
            return MutationResult.skipped()

        self._set_sending(True)
        try:
            result = await self._mutator.call(
                lambda: self._repo.create_comment(target_kind=target.kind, target_id=target.id, body=body),
                notice="Could not send comment.",
            )
            if not result.ok:
                return result
            comment: Comment = result.value
            target.comments.append(comment)

            # the target may hold a list the task no longer owns
            if target.kind == "task":
                task = self._project.find_task(target.id)
                if task is not None and task.comments is not target.comments:
                    task.comments.append(comment)
            self.commentsChanged.emit()
            return result
        finally:
            self._set_sending(False)

    async def edit_comment(self, comment_id: int, new_body: str) -> MutationResult:
        if not (new_body or "").strip():
            return MutationResult.skipped()
        handle = locate_comment(self._project, comment_id)
        if handle is None:
            self._log.debug("Comment %s not found for edit", comment_id)
            return MutationResult.not_found()

        comment = handle.comment
        getter, setter = attrs(comment, "body")

        def merge(server):
            if isinstance(server, dict) and server.get("estado"):
                comment.status = server["estado"]

        result = await self._mutator.update(
            key=("comment", comment_id, "body"), getter=getter, setter=setter, value=new_body,
            remote=lambda: self._repo.update_comment(comment_id, body=new_body),
            label="comment",
            merge=merge,
        )
        self.commentsChanged.emit()
        return result

    async def delete_comment(self, comment_id: int) -> MutationResult:
        if not self._mutator.prompter.confirm("Delete this comment?"):
            return MutationResult.declined()
        handle = locate_comment(self._project, comment_id)
        if handle is None:
            self._log.debug("Comment %s not found for delete", comment_id)
            return MutationResult.not_found()

        # no rollback: a failed delete is reported and the comment stays gone
        handle.remove()
        self.commentsChanged.emit()
        return await self._mutator.call(
            lambda: self._repo.delete_comment(comment_id), notice="Could not delete comment.",
        )

    # ---- internals ----
    def _set_target(self, target: Optional[ActiveTarget]) -> None:
        self._target = target
        self.activeTargetChanged.emit(target)
        self.commentsChanged.emit()

    def _set_sending(self, value: bool) -> None:
        if self._sending != value:
            self._sending = value
            self.sendingChanged.emit(value)
