# tests/test_completion_guard.py
from __future__ import annotations

import pytest

from conftest import FakePrompter
from tasksync.models.entities import Subtask
from tasksync.models.types import STATUS_COMPLETED, STATUS_PENDING
from tasksync.services.completion_guard import count_incomplete, guard_completion


def _subs(*statuses):
    return [Subtask(id=i, task_id=1, title=f"s{i}", status=s) for i, s in enumerate(statuses)]


def test_count_incomplete_treats_unknown_status_as_incomplete():
    assert count_incomplete(_subs(STATUS_COMPLETED, STATUS_PENDING, "bloqueado")) == 2
    assert count_incomplete([]) == 0


def test_all_children_complete_passes_without_asking():
    p = FakePrompter(answer=False)
    assert guard_completion(_subs(STATUS_COMPLETED), STATUS_COMPLETED, p,
                            parent_noun="task", child_noun="subtask")
    assert p.questions == []


@pytest.mark.parametrize("answer", [True, False])
def test_incomplete_children_ask_with_count(answer):
    p = FakePrompter(answer=answer)
    ok = guard_completion(_subs(STATUS_PENDING, STATUS_PENDING, STATUS_COMPLETED), STATUS_COMPLETED, p,
                          parent_noun="task", child_noun="subtask")
    assert ok is answer
    assert len(p.questions) == 1
    assert "2 incomplete subtasks" in p.questions[0]


def test_leaving_completed_is_never_guarded():
    p = FakePrompter(answer=False)
    assert guard_completion(_subs(STATUS_PENDING), STATUS_PENDING, p,
                            parent_noun="project", child_noun="task")
    assert p.questions == []
