# Rev 0.1.0
from __future__ import annotations
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import Project
from ..repositories.http_project_repository import HttpProjectRepository
from ..services.completion_guard import guard_completion
from ..services.optimistic import MutationResult, OptimisticMutator, attrs, merge_fields
from ..utils.logging_setup import get_logger


class ProjectViewModel(QObject):
    """
    Edits on the loaded project itself.
    Emits:
      - projectUpdated(project)
      - projectDeleted(project_id: int)
      - closeRequested()
    """

    projectUpdated = Signal(object)
    projectDeleted = Signal(int)
    closeRequested = Signal()

    def __init__(self, project: Project, projects_repo: HttpProjectRepository, mutator: OptimisticMutator):
        super().__init__()
        self._project = project
        self._repo = projects_repo
        self._mutator = mutator
        self._log = get_logger("ProjectViewModel")
        self._deleting = False

    @property
    def project(self) -> Project:
        return self._project

    @property
    def is_deleting(self) -> bool:
        return self._deleting

    # ---- commands ----
    async def update_title(self, new_title: str) -> MutationResult:
        title = (new_title or "").strip()
        if not title:
            return MutationResult.skipped()
        p = self._project
        getter, setter = attrs(p, "title")
        return self._done(await self._mutator.update(
            key=("project", p.id, "title"), getter=getter, setter=setter, value=title,
            remote=lambda: self._repo.update_project(p.id, title=title),
            label="project title",
        ))

    async def update_details(
        self,
        *,
        description: Optional[str],
        start_date: Optional[str],
        due_date: Optional[str],
    ) -> MutationResult:
        p = self._project
        names = ("description", "start_date", "due_date")
        getter, setter = attrs(p, *names)
        return self._done(await self._mutator.update(
            key=("project", p.id, "details"), getter=getter, setter=setter,
            value=(description, start_date, due_date),
            remote=lambda: self._repo.update_project(
                p.id, description=description, start_date=start_date, due_date=due_date,
            ),
            label="project",
            merge=merge_fields(p, *names),
        ))

    async def change_status(self, new_status: str) -> MutationResult:
        p = self._project
        if not guard_completion(p.tasks, new_status, self._mutator.prompter,
                                parent_noun="project", child_noun="task"):
            self._log.info("Completion of project %s declined", p.id)
            return MutationResult.declined()
        getter, setter = attrs(p, "status")
        return self._done(await self._mutator.update(
            key=("project", p.id, "status"), getter=getter, setter=setter, value=new_status,
            remote=lambda: self._repo.update_project(p.id, status=new_status),
            label="project status",
        ))

    async def delete_project(self) -> MutationResult:
        if not self._mutator.prompter.confirm("Delete this project and all of its tasks?"):
            return MutationResult.declined()
        pid = self._project.id
        self._deleting = True
        try:
            result = await self._mutator.call(
                lambda: self._repo.delete_project(pid), notice="Could not delete project.",
            )
        finally:
            self._deleting = False
        if result.ok:
            self._log.info("Project %s deleted", pid)
            self.projectDeleted.emit(pid)
            self.closeRequested.emit()
        return result

    # ---- internals ----
    def _done(self, result: MutationResult) -> MutationResult:
        if result.ok:
            self.projectUpdated.emit(self._project)
        return result
