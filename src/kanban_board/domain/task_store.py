from __future__ import annotations
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from kanban_board.domain.outcomes import (
    EMPTY_TITLE, Added, Cleared, Moved, NoOp, Rejected, Removed,
)
from kanban_board.domain.task_models import Snapshot, Stage, Task, date_label


class TaskStore:
    """
    Authoritative in-memory board state: the task collection and the id counter.

    Mutators never persist or render; they return an outcome and the caller
    decides what to do with `outcome.changed`.
    """
    def __init__(self, snapshot: Optional[Snapshot] = None, clock: Callable[[], date] = date.today):
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1
        self._clock = clock
        if snapshot is not None:
            self.restore(snapshot)

    def restore(self, snapshot: Snapshot) -> None:
        self._tasks = {t.id: t.model_copy() for t in snapshot.tasks}
        floor = max(self._tasks, default=0) + 1
        self._next_id = max(snapshot.next_id, floor)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def snapshot(self) -> Snapshot:
        return Snapshot(tasks=[t.model_copy() for t in self._tasks.values()], next_id=self._next_id)

    def add(self, title: str, description: str = "") -> Union[Added, Rejected]:
        title = (title or "").strip()
        if not title:
            return Rejected(EMPTY_TITLE)
        task = Task(
            id=self._next_id,
            title=title,
            description=(description or "").strip(),
            stage=Stage.todo,
            date=date_label(self._clock()),
        )
        self._next_id += 1
        self._tasks[task.id] = task
        return Added(task.model_copy())

    def move(self, task_id: int, direction: int) -> Union[Moved, NoOp]:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")
        task = self._tasks.get(task_id)
        if task is None:
            return NoOp("not found")
        dest = task.stage.shifted(direction)
        if dest is None:
            return NoOp("edge")
        return self._relocate(task, dest)

    def move_to(self, task_id: int, stage: Stage) -> Union[Moved, NoOp]:
        task = self._tasks.get(task_id)
        if task is None:
            return NoOp("not found")
        stage = Stage(stage)
        if task.stage == stage:
            return NoOp("same stage")
        return self._relocate(task, stage)

    def _relocate(self, task: Task, stage: Stage) -> Moved:
        task.stage = stage
        return Moved(task.model_copy(), stage)

    def remove(self, task_id: int) -> Union[Removed, NoOp]:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return NoOp("not found")
        return Removed(task.model_copy())

    def clear_all(self) -> Union[Cleared, NoOp]:
        if not self._tasks:
            return NoOp("empty")
        count = len(self._tasks)
        self._tasks = {}
        # ids restart only here; plain removals never free an id
        self._next_id = 1
        return Cleared(count)
