# Rev 0.1.0
from __future__ import annotations
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import Project, Task
from ..models.types import STATUS_COMPLETED, STATUS_PENDING
from ..repositories.http_task_repository import HttpTaskRepository
from ..services.completion_guard import guard_completion
from ..services.optimistic import MutationResult, OptimisticMutator, attrs, merge_fields
from ..utils.logging_setup import get_logger


class TasksViewModel(QObject):
    """
    Task-level commands on a live project tree.
    Emits:
      - projectUpdated(project) after every confirmed change
      - taskRemoved(task_id: int) as soon as a task is spliced out
    """

    projectUpdated = Signal(object)
    taskRemoved = Signal(int)

    def __init__(self, project: Project, tasks_repo: HttpTaskRepository, mutator: OptimisticMutator):
        super().__init__()
        self._project = project
        self._tasks = tasks_repo
        self._mutator = mutator
        self._log = get_logger("TasksViewModel")

    # ---- commands
    async def add_task(self, title: str, description: str = "") -> MutationResult:
        title = (title or "").strip()
        if not title:
            return MutationResult.skipped()
        pid = self._project.id
        result = await self._mutator.call(
            lambda: self._tasks.create_task(project_id=pid, title=title, description=description,
                                            status=STATUS_PENDING),
            notice="Could not create task.",
        )
        if result.ok:
            task: Task = result.value
            self._project.tasks.append(task)
            self._log.info("Task %s created in project %s", task.id, pid)
            self.projectUpdated.emit(self._project)
        return result

    async def update_task_title(self, task: Task, new_title: str) -> MutationResult:
        title = (new_title or "").strip()
        if not title:
            return MutationResult.skipped()
        getter, setter = attrs(task, "title")
        return self._done(await self._mutator.update(
            key=("task", task.id, "title"), getter=getter, setter=setter, value=title,
            remote=lambda: self._tasks.update_task(task.id, title=title),
            label="task",
        ))

    async def update_task_details(self, task: Task, *, start_date: Optional[str], due_date: Optional[str]) -> MutationResult:
        getter, setter = attrs(task, "start_date", "due_date")
        return self._done(await self._mutator.update(
            key=("task", task.id, "details"), getter=getter, setter=setter,
            value=(start_date, due_date),
            remote=lambda: self._tasks.update_task(task.id, start_date=start_date, due_date=due_date),
            label="task",
            merge=merge_fields(task, "start_date", "due_date"),
        ))

    async def set_task_status(self, task: Task, new_status: str) -> MutationResult:
        if not guard_completion(task.subtasks, new_status, self._mutator.prompter,
                                parent_noun="task", child_noun="subtask"):
            self._log.info("Completion of task %s declined", task.id)
            return MutationResult.declined()
        getter, setter = attrs(task, "status")
        return self._done(await self._mutator.update(
            key=("task", task.id, "status"), getter=getter, setter=setter, value=new_status,
            remote=lambda: self._tasks.update_task(task.id, status=new_status),
            label="task status",
        ))

    async def toggle_task_status(self, task: Task) -> MutationResult:
        # anything other than pending reopens
        new_status = STATUS_COMPLETED if task.status == STATUS_PENDING else STATUS_PENDING
        return await self.set_task_status(task, new_status)

    async def delete_task(self, task: Task) -> MutationResult:
        if not self._mutator.prompter.confirm("Delete this task?"):
            return MutationResult.declined()
        tasks = self._project.tasks
        idx = next((i for i, t in enumerate(tasks) if t.id == task.id), None)
        if idx is None:
            return MutationResult.not_found()
        # removed up front; a failed delete is reported but not undone
        tasks.pop(idx)
        self.taskRemoved.emit(task.id)
        result = await self._mutator.call(
            lambda: self._tasks.delete_task(task.id), notice="Could not delete task.",
        )
        return self._done(result)

    # ---- internals
    def _done(self, result: MutationResult) -> MutationResult:
        if result.ok:
            self.projectUpdated.emit(self._project)
        return result
