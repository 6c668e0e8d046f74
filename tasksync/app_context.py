# tasksync application context
# Rev 0.1.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from .models.entities import Project
from .repositories.api_client import ApiClient
from .repositories.auth_repository import HttpAuthRepository
from .repositories.http_comment_repository import HttpCommentRepository
from .repositories.http_project_repository import HttpProjectRepository
from .repositories.http_subtask_repository import HttpSubtaskRepository
from .repositories.http_task_repository import HttpTaskRepository
from .services.optimistic import OptimisticMutator
from .session import Session
from .ui.prompter import MessageBoxPrompter, Prompter
from .utils.config import load_settings
from .utils.logging_setup import get_logger, setup_logging
from .viewmodels.comments_viewmodel import CommentsViewModel
from .viewmodels.project_viewmodel import ProjectViewModel
from .viewmodels.subtasks_viewmodel import SubtasksViewModel
from .viewmodels.tasks_viewmodel import TasksViewModel


@dataclass
class ProjectViewModels:
    """Viewmodels bound to one loaded project; they share one mutator."""
    project: ProjectViewModel
    tasks: TasksViewModel
    subtasks: SubtasksViewModel
    comments: CommentsViewModel
    mutator: OptimisticMutator

    def close(self) -> None:
        self.mutator.cancel_all()


@dataclass
class AppContext:
    """Central container for shared app resources."""
    settings: Dict[str, Any]
    logfile: Path
    session: Session
    api: ApiClient
    prompter: Prompter
    auth: HttpAuthRepository
    projects: HttpProjectRepository
    tasks: HttpTaskRepository
    subtasks: HttpSubtaskRepository
    comments: HttpCommentRepository

    @classmethod
    def create(
        cls,
        settings: Optional[Dict[str, Any]] = None,
        *,
        prompter: Optional[Prompter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        log_dir: Optional[Path] = None,
    ) -> "AppContext":
        """Initialize logging, session, HTTP client and repositories."""
        settings = settings or load_settings()
        log_cfg = settings.get("logging", {})
        logfile = setup_logging(
            log_dir=log_dir,
            level=log_cfg.get("level"),
            max_bytes=int(log_cfg.get("max_bytes", 5_000_000)),
            backups=int(log_cfg.get("backups", 7)),
        )
        log = get_logger("AppContext")
        api_cfg = settings.get("api", {})
        session = Session()
        api = ApiClient(
            api_cfg.get("base_url", "http://127.0.0.1:8000"),
            session,
            timeout=float(api_cfg.get("timeout", 10.0)),
            transport=transport,
        )
        log.info("AppContext initialized with API=%s", api_cfg.get("base_url"))
        return cls(
            settings=settings,
            logfile=logfile,
            session=session,
            api=api,
            prompter=prompter or MessageBoxPrompter(),
            auth=HttpAuthRepository(api),
            projects=HttpProjectRepository(api),
            tasks=HttpTaskRepository(api),
            subtasks=HttpSubtaskRepository(api),
            comments=HttpCommentRepository(api),
        )

    def bind_project(self, project: Project) -> ProjectViewModels:
        """Viewmodels for a project the view has loaded."""
        sync_cfg = self.settings.get("sync", {})
        mutator = OptimisticMutator(
            self.prompter, cancel_superseded=bool(sync_cfg.get("cancel_superseded", True)),
        )
        return ProjectViewModels(
            project=ProjectViewModel(project, self.projects, mutator),
            tasks=TasksViewModel(project, self.tasks, mutator),
            subtasks=SubtasksViewModel(project, self.subtasks, mutator),
            comments=CommentsViewModel(project, self.comments, mutator),
            mutator=mutator,
        )

    async def aclose(self) -> None:
        await self.api.aclose()
