"""
Results of board commands.

Every store / session operation answers with one of these instead of
raising. `changed` tells the caller whether to persist and re-render,
`message` is the short notification text (None for no-ops).
"""
from __future__ import annotations
from dataclasses import dataclass
from kanban_board.domain.task_models import Stage, Task


@dataclass(frozen=True)
class NoOp:
    reason: str = ""
    changed = False
    message = None
    task = None


@dataclass(frozen=True)
class Rejected:
    reason: str
    changed = False
    task = None

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class Added:
    task: Task
    changed = True

    @property
    def message(self) -> str:
        return f"Task posted to {Stage.todo.label} ✓"


@dataclass(frozen=True)
class Moved:
    task: Task
    stage: Stage
    changed = True

    @property
    def message(self) -> str:
        return f"→ Moved to {self.stage.label}"


@dataclass(frozen=True)
class Removed:
    task: Task
    changed = True
    message = "Task deleted"


@dataclass(frozen=True)
class Cleared:
    count: int
    changed = True
    message = "Board cleared"
    task = None


@dataclass(frozen=True)
class DropRequest:
    """A resolved drop, ready for TaskStore.move_to."""
    task_id: int
    stage: Stage


EMPTY_TITLE = "Please enter a task title"
NOTHING_DRAGGED = "No task is being dragged"
