# tests/test_tasks_viewmodel.py
from __future__ import annotations
import asyncio

import pytest

from conftest import FakePrompter, StubRepo
from tasksync.models.entities import Subtask, Task
from tasksync.models.types import STATUS_COMPLETED, STATUS_PENDING
from tasksync.services.optimistic import OptimisticMutator
from tasksync.viewmodels.tasks_viewmodel import TasksViewModel


def _created(**kwargs):
    return Task(id=500, project_id=kwargs["project_id"], title=kwargs["title"],
                description=kwargs["description"], status=kwargs["status"])


@pytest.fixture()
def repo() -> StubRepo:
    return StubRepo(create_task=_created)


@pytest.fixture()
def vm(project, repo, mutator) -> TasksViewModel:
    return TasksViewModel(project, repo, mutator)


def test_add_task_appends_with_empty_collections(vm, project, repo):
    updates = []
    vm.projectUpdated.connect(updates.append)

    result = asyncio.run(vm.add_task("  Ship v1 "))

    assert result.ok
    task = project.tasks[-1]
    assert (task.id, task.title, task.status) == (500, "Ship v1", STATUS_PENDING)
    assert task.subtasks == [] and task.comments == []
    assert repo.calls == [("create_task", (), {
        "project_id": 1, "title": "Ship v1", "description": "", "status": STATUS_PENDING,
    })]
    assert updates == [project]


def test_add_task_blank_title_is_skipped(vm, project, repo):
    result = asyncio.run(vm.add_task("   "))
    assert result.code == "skipped"
    assert repo.calls == []
    assert len(project.tasks) == 2


def test_add_task_failure_leaves_tree_untouched(vm, project, repo, prompter):
    repo.fail.add("create_task")
    result = asyncio.run(vm.add_task("Ship v1"))
    assert result.code == "failed"
    assert [t.id for t in project.tasks] == [100, 101]
    assert prompter.notices == ["Could not create task."]


def test_title_edit_applies_immediately_and_reverts_on_failure(vm, project, repo):
    task = project.tasks[1]
    task.title = "Old"
    repo.fail.add("update_task")

    async def scenario():
        repo.gate = asyncio.Event()
        op = asyncio.ensure_future(vm.update_task_title(task, "New"))
        await asyncio.sleep(0)
        seen = task.title
        repo.gate.set()
        return seen, await op

    seen, result = asyncio.run(scenario())
    assert seen == "New"
    assert result.code == "reverted"
    assert task.title == "Old"


def test_title_edit_success(vm, project, repo):
    task = project.tasks[1]
    result = asyncio.run(vm.update_task_title(task, "New"))
    assert result.ok and task.title == "New"
    assert repo.calls[-1] == ("update_task", (101,), {"title": "New"})


def test_details_edit_reverts_both_dates(vm, project, repo):
    task = project.tasks[0]
    task.start_date, task.due_date = "2024-01-01", "2024-01-10"
    repo.fail.add("update_task")
    result = asyncio.run(vm.update_task_details(task, start_date="2024-02-01", due_date="2024-02-10"))
    assert result.code == "reverted"
    assert (task.start_date, task.due_date) == ("2024-01-01", "2024-01-10")


def test_completion_declined_changes_nothing(project, repo):
    prompter = FakePrompter(answer=False)
    vm = TasksViewModel(project, repo, OptimisticMutator(prompter))
    task = project.tasks[0]  # Spec pending, Review completed

    result = asyncio.run(vm.toggle_task_status(task))

    assert result.code == "declined"
    assert task.status == STATUS_PENDING
    assert repo.calls == []
    assert "1 incomplete subtask" in prompter.questions[0]


def test_completion_accepted_issues_one_call(vm, project, repo, prompter):
    task = project.tasks[0]
    result = asyncio.run(vm.toggle_task_status(task))
    assert result.ok
    assert task.status == STATUS_COMPLETED
    assert repo.calls == [("update_task", (100,), {"status": STATUS_COMPLETED})]
    assert len(prompter.questions) == 1


def test_completion_with_no_pending_children_does_not_ask(vm, project, prompter):
    task = project.tasks[1]
    task.subtasks.append(Subtask(id=9, task_id=101, title="done", status=STATUS_COMPLETED))
    assert asyncio.run(vm.toggle_task_status(task)).ok
    assert prompter.questions == []


def test_reopen_bypasses_guard(vm, project, repo, prompter):
    task = project.tasks[0]
    task.status = STATUS_COMPLETED
    assert asyncio.run(vm.toggle_task_status(task)).ok
    assert task.status == STATUS_PENDING
    assert prompter.questions == []


def test_status_failure_reverts(vm, project, repo):
    task = project.tasks[1]
    repo.fail.add("update_task")
    assert asyncio.run(vm.toggle_task_status(task)).code == "reverted"
    assert task.status == STATUS_PENDING


def test_delete_removes_even_when_remote_fails(vm, project, repo, prompter):
    repo.fail.add("delete_task")
    removed = []
    vm.taskRemoved.connect(removed.append)
    result = asyncio.run(vm.delete_task(project.tasks[0]))
    assert result.code == "failed"
    assert [t.id for t in project.tasks] == [101]
    assert removed == [100]
    assert prompter.notices == ["Could not delete task."]


def test_delete_declined(project, repo):
    vm = TasksViewModel(project, repo, OptimisticMutator(FakePrompter(answer=False)))
    assert asyncio.run(vm.delete_task(project.tasks[0])).code == "declined"
    assert len(project.tasks) == 2
    assert repo.calls == []


def test_toggle_reopens_any_non_pending_status(vm, project, repo, prompter):
    task = project.tasks[0]
    task.status = "en_progreso"
    assert asyncio.run(vm.toggle_task_status(task)).ok
    assert task.status == STATUS_PENDING
    assert repo.calls == [("update_task", (100,), {"status": STATUS_PENDING})]
    assert prompter.questions == []
