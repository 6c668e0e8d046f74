# tests/test_payloads.py
from __future__ import annotations

from tasksync.models.payloads import from_wire, project_from_payload, to_wire
from tasksync.models.types import COMMENT_STATUS_SUBMITTED, STATUS_PENDING


def test_project_tree_from_payload():
    project = project_from_payload({
        "id": 1, "titulo": "Launch", "estado": "completado",
        "comments": [{"id": 10, "cuerpo": "kickoff", "created_at": "2024-01-05T09:00:00"}],
        "tasks": [{
            "id": 100, "titulo": "Design",
            "subtareas": [{"id": 1000, "titulo": "Spec", "comments": [{"id": 30, "cuerpo": "o", "estado": "leido"}]}],
        }],
    })
    assert (project.title, project.status) == ("Launch", "completado")
    task = project.tasks[0]
    assert (task.project_id, task.status, task.comments) == (1, STATUS_PENDING, [])
    sub = task.subtasks[0]
    assert sub.task_id == 100
    assert sub.comments[0].status == "leido"
    assert project.comments[0].status == COMMENT_STATUS_SUBMITTED


def test_field_name_mapping():
    assert to_wire({"title": "t", "due_date": None, "extra": 1}) == {"titulo": "t", "fecha_limite": None, "extra": 1}
    assert from_wire({"titulo": "t", "estado": "x"}, ("title", "description")) == {"title": "t"}
