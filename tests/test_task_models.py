# tests/test_task_models.py

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from kanban_board.domain.task_models import Snapshot, Stage, Task, date_label


def test_stage_order_and_labels():
    assert [s.value for s in Stage] == ["todo", "progress", "done"]
    assert [s.label for s in Stage] == ["To Do", "In Progress", "Done"]
    assert Stage.progress.position == 1


@pytest.mark.parametrize(
    "stage, direction, expected",
    [
        (Stage.todo, 1, Stage.progress),
        (Stage.progress, -1, Stage.todo),
        (Stage.progress, 1, Stage.done),
        (Stage.todo, -1, None),
        (Stage.done, 1, None),
    ],
)
def test_stage_shifted(stage, direction, expected):
    assert stage.shifted(direction) is expected


def test_task_uses_storage_field_names():
    task = Task.model_validate({"id": 3, "title": "Ship", "desc": "soon", "col": "done", "date": "Feb 2"})
    assert task.description == "soon"
    assert task.stage is Stage.done
    assert task.to_record() == {"id": 3, "title": "Ship", "desc": "soon", "col": "done", "date": "Feb 2"}


def test_task_rejects_unknown_stage_and_bad_id():
    with pytest.raises(ValidationError):
        Task(id=1, title="x", stage="archived")
    with pytest.raises(ValidationError):
        Task(id=0, title="x", stage=Stage.todo)


def test_stage_assignment_is_validated():
    task = Task(id=1, title="x", stage=Stage.todo)
    with pytest.raises(ValidationError):
        task.stage = "nowhere"


def test_snapshot_record_uses_next_id_key():
    snap = Snapshot(tasks=[], next_id=4)
    assert snap.to_record() == {"tasks": [], "nextId": 4}


def test_date_label_has_no_zero_padding():
    assert date_label(date(2026, 2, 5)) == "Feb 5"
    assert date_label(date(2026, 10, 19)) == "Oct 19"


def test_task_title_is_trimmed_and_never_blank():
    assert Task(id=1, title="  hi ", stage=Stage.todo).title == "hi"
    with pytest.raises(ValidationError):
        Task(id=1, title="   ", stage=Stage.todo)
