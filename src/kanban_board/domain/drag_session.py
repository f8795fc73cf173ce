from __future__ import annotations
from enum import Enum
from typing import Optional, Union

from kanban_board.domain.outcomes import NOTHING_DRAGGED, DropRequest, Rejected
from kanban_board.domain.task_models import Stage


class DragState(str, Enum):
    idle = "idle"
    dragging = "dragging"


class DragSession:
    """
    Tracks which task is mid-drag. Holds only the id, never the task.

    Single pointer: a second begin() replaces the tracked id. end() always
    returns to idle, whether the drop landed, failed or was abandoned.
    """
    def __init__(self):
        self._task_id: Optional[int] = None

    @property
    def state(self) -> DragState:
        return DragState.idle if self._task_id is None else DragState.dragging

    @property
    def task_id(self) -> Optional[int]:
        return self._task_id

    def begin(self, task_id: int) -> None:
        self._task_id = task_id

    def end(self) -> None:
        self._task_id = None

    def resolve_drop(self, stage: Stage) -> Union[DropRequest, Rejected]:
        if self._task_id is None:
            return Rejected(NOTHING_DRAGGED)
        return DropRequest(task_id=self._task_id, stage=Stage(stage))
