# Rev 0.1.0
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import Project, Subtask, Task
from ..models.types import STATUS_COMPLETED, STATUS_PENDING
from ..repositories.http_subtask_repository import HttpSubtaskRepository
from ..services.optimistic import MutationResult, OptimisticMutator, attrs, merge_fields
from ..utils.logging_setup import get_logger


class SubtasksViewModel(QObject):
    """
    Subtask commands. Subtask status is not guarded: subtasks have no children.
    Emits:
      - subtasksChanged(task_id: int)
    """

    subtasksChanged = Signal(int)

    def __init__(self, project: Project, subtasks_repo: HttpSubtaskRepository, mutator: OptimisticMutator):
        super().__init__()
        self._project = project
        self._subs = subtasks_repo
        self._mutator = mutator
        self._log = get_logger("SubtasksViewModel")

    # ---- commands ----
    async def add_subtask(self, task_id: int, title: str, description: str = "") -> MutationResult:
        title = (title or "").strip()
        if not title:
            return MutationResult.skipped()
        task = self._project.find_task(task_id)
        if task is None:
            return MutationResult.not_found()
        result = await self._mutator.call(
            lambda: self._subs.create_subtask(task_id=task_id, title=title, description=description,
                                              status=STATUS_PENDING),
            notice="Could not create subtask.",
        )
        if result.ok:
            subtask: Subtask = result.value
            task.subtasks.append(subtask)
            self._log.info("Subtask %s created under task %s", subtask.id, task_id)
            self.subtasksChanged.emit(task_id)
        return result

    async def update_subtask_title(self, subtask: Subtask, new_title: str) -> MutationResult:
        title = (new_title or "").strip()
        if not title:
            return MutationResult.skipped()
        getter, setter = attrs(subtask, "title")
        return self._done(subtask, await self._mutator.update(
            key=("subtask", subtask.id, "title"), getter=getter, setter=setter, value=title,
            remote=lambda: self._subs.update_subtask(subtask.id, title=title),
            label="subtask",
        ))

    async def update_subtask_details(
        self,
        subtask: Subtask,
        *,
        start_date: Optional[str],
        due_date: Optional[str],
    ) -> MutationResult:
        getter, setter = attrs(subtask, "start_date", "due_date")
        return self._done(subtask, await self._mutator.update(
            key=("subtask", subtask.id, "details"), getter=getter, setter=setter,
            value=(start_date, due_date),
            remote=lambda: self._subs.update_subtask(subtask.id, start_date=start_date, due_date=due_date),
            label="subtask",
            merge=merge_fields(subtask, "start_date", "due_date"),
        ))

    async def toggle_subtask_status(self, subtask: Subtask) -> MutationResult:
        new_status = STATUS_COMPLETED if subtask.status == STATUS_PENDING else STATUS_PENDING
        getter, setter = attrs(subtask, "status")
        return self._done(subtask, await self._mutator.update(
            key=("subtask", subtask.id, "status"), getter=getter, setter=setter, value=new_status,
            remote=lambda: self._subs.update_subtask(subtask.id, status=new_status),
            label="subtask status",
        ))

    async def delete_subtask(self, task: Task, subtask_id: int) -> MutationResult:
        if not self._mutator.prompter.confirm("Delete this subtask?"):
            return MutationResult.declined()
        idx = next((i for i, s in enumerate(task.subtasks) if s.id == subtask_id), None)
        if idx is None:
            return MutationResult.not_found()
        task.subtasks.pop(idx)
        self.subtasksChanged.emit(task.id)
        return await self._mutator.call(
            lambda: self._subs.delete_subtask(subtask_id), notice="Could not delete subtask.",
        )

    # ---- internals ----
    def _done(self, subtask: Subtask, result: MutationResult) -> MutationResult:
        if result.ok and subtask.task_id is not None:
            self.subtasksChanged.emit(subtask.task_id)
        return result
