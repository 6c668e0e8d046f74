# tests/test_project_viewmodel.py
from __future__ import annotations
import asyncio

import pytest

from conftest import FakePrompter, StubRepo
from tasksync.models.types import STATUS_COMPLETED, STATUS_PENDING
from tasksync.services.optimistic import OptimisticMutator
from tasksync.viewmodels.project_viewmodel import ProjectViewModel


@pytest.fixture()
def repo() -> StubRepo:
    return StubRepo()


@pytest.fixture()
def vm(project, repo, mutator) -> ProjectViewModel:
    return ProjectViewModel(project, repo, mutator)


def test_title_update_notifies(vm, project, repo):
    updates = []
    vm.projectUpdated.connect(updates.append)
    assert asyncio.run(vm.update_title("Launch 2")).ok
    assert project.title == "Launch 2"
    assert updates == [project]
    assert repo.calls == [("update_project", (1,), {"title": "Launch 2"})]


def test_details_revert_all_three_fields(vm, project, repo):
    project.description = "old"
    repo.fail.add("update_project")
    result = asyncio.run(vm.update_details(description="new", start_date="2024-01-01", due_date="2024-06-01"))
    assert result.code == "reverted"
    assert (project.description, project.start_date, project.due_date) == ("old", None, None)


def test_completion_guard_counts_tasks(project, repo):
    prompter = FakePrompter(answer=False)
    vm = ProjectViewModel(project, repo, OptimisticMutator(prompter))
    assert asyncio.run(vm.change_status(STATUS_COMPLETED)).code == "declined"
    assert project.status == STATUS_PENDING
    assert repo.calls == []
    assert "2 incomplete tasks" in prompter.questions[0]


def test_completion_accepted(vm, project, repo):
    assert asyncio.run(vm.change_status(STATUS_COMPLETED)).ok
    assert project.status == STATUS_COMPLETED
    assert repo.calls == [("update_project", (1,), {"status": STATUS_COMPLETED})]


def test_delete_project_emits_on_success(vm, repo):
    deleted, closed = [], []
    vm.projectDeleted.connect(deleted.append)
    vm.closeRequested.connect(lambda: closed.append(True))
    assert asyncio.run(vm.delete_project()).ok
    assert deleted == [1] and closed == [True]
    assert vm.is_deleting is False


def test_delete_project_failure_reports(vm, repo, prompter):
    deleted = []
    vm.projectDeleted.connect(deleted.append)
    repo.fail.add("delete_project")
    assert asyncio.run(vm.delete_project()).code == "failed"
    assert deleted == []
    assert prompter.notices == ["Could not delete project."]
