# Rev 0.1.0

"""Pytest fixtures for tasksync (Rev 0.1.0)"""
from __future__ import annotations
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
from PySide6.QtCore import QCoreApplication

from tasksync.errors import RemoteError
from tasksync.models.entities import Comment, Project, Subtask, Task
from tasksync.models.types import STATUS_COMPLETED
from tasksync.services.optimistic import OptimisticMutator


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def isolated_logging(monkeypatch):
    """Undo whatever setup_logging does to the root logger and excepthook."""
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    chatty = {n: logging.getLogger(n).level for n in ("httpx", "httpcore")}
    yield root
    for h in root.handlers[:]:
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for name, lvl in chatty.items():
        logging.getLogger(name).setLevel(lvl)


class FakePrompter:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.questions: List[str] = []
        self.notices: List[str] = []

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.answer

    def notify(self, message: str) -> None:
        self.notices.append(message)


class StubRepo:
    """
    Async stand-in for any Http*Repository: every method records its call,
    waits on ``gate`` when set, raises for names listed in ``fail`` and
    returns ``responses[name]`` (called with the arguments if callable).
    """

    def __init__(self, **responses: Any):
        self.calls: List[Tuple[str, tuple, Dict[str, Any]]] = []
        self.fail: Set[str] = set()
        self.responses: Dict[str, Any] = responses
        self.gate: Optional[asyncio.Event] = None

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        async def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if self.gate is not None:
                await self.gate.wait()
            if name in self.fail:
                raise RemoteError(f"{name} failed", status=500)
            resp = self.responses.get(name, {})
            return resp(*args, **kwargs) if callable(resp) else resp

        return method

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]


@pytest.fixture()
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture()
def mutator(prompter: FakePrompter) -> OptimisticMutator:
    return OptimisticMutator(prompter)


@pytest.fixture()
def project() -> Project:
    """
    Launch (project, comment 10 @ day 5)
      Design (task 100, comment 20 @ day 1)
        Spec (subtask 1000, comment 30 @ day 3)
        Review (subtask 1001, completed)
      Build (task 101, comment 21 @ day 4)
    """
    spec = Subtask(id=1000, task_id=100, title="Spec",
                   comments=[Comment(id=30, body="outline", created_at="2024-01-03T09:00:00")])
    review = Subtask(id=1001, task_id=100, title="Review", status=STATUS_COMPLETED)
    design = Task(id=100, project_id=1, title="Design", subtasks=[spec, review],
                  comments=[Comment(id=20, body="draft", created_at="2024-01-01T09:00:00")])
    build = Task(id=101, project_id=1, title="Build",
                 comments=[Comment(id=21, body="wip", created_at="2024-01-04T09:00:00")])
    return Project(id=1, title="Launch", tasks=[design, build],
                   comments=[Comment(id=10, body="kickoff", created_at="2024-01-05T09:00:00")])
