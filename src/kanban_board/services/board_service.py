import asyncio
import logging
from typing import Optional

from kanban_board.domain.drag_session import DragSession
from kanban_board.domain.outcomes import DropRequest, NoOp, Rejected
from kanban_board.domain.task_models import Snapshot, Stage
from kanban_board.domain.task_store import TaskStore
from kanban_board.infra.persistence import SnapshotPersistence
from kanban_board.views.projector import BoardView, build_board_view, count_by_stage, render_board

logger = logging.getLogger("kanban.board")

class BoardService:
    """
    Command surface for the UI layer.

    Each command mutates the store (or not), saves the snapshot when the
    outcome changed something, and hands the outcome back so the caller can
    decide on notification and re-render. Commands are serialised: a
    mutation and its save finish before the next command starts.
    """
    def __init__(self, persistence: SnapshotPersistence, store: Optional[TaskStore] = None,
                 drag: Optional[DragSession] = None):
        self.persistence = persistence
        self.store = store or TaskStore()
        self.drag = drag or DragSession()
        self._lock = asyncio.Lock()

    async def start(self) -> Snapshot:
        """Load the stored board and write it back (seeds a fresh or corrupt store)."""
        async with self._lock:
            snapshot = await self.persistence.load()
            self.store.restore(snapshot)
            await self.persistence.save(self.store.snapshot())
        logger.info(
            "board.ready",
            extra={"category": "board", "event": "board.ready", "tasks": len(self.store), "next_id": self.store.next_id},
        )
        return snapshot

    async def _commit(self, event: str, outcome, **fields):
        if outcome.changed:
            await self.persistence.save(self.store.snapshot())
            logger.info(event, extra={"category": "board", "event": event, **fields})
        else:
            logger.debug(
                f"{event}.noop",
                extra={"category": "board", "event": f"{event}.noop", "reason": outcome.reason, **fields},
            )
        return outcome

    async def add_task(self, title: str, desc: str = ""):
        async with self._lock:
            outcome = self.store.add(title, desc)
            if isinstance(outcome, Rejected):
                logger.info("task.rejected", extra={"category": "board", "event": "task.rejected", "reason": outcome.reason})
                return outcome
            return await self._commit("task.create", outcome, task_id=outcome.task.id, title=outcome.task.title)

    async def move_task(self, task_id: int, direction: int):
        async with self._lock:
            outcome = self.store.move(task_id, direction)
            return await self._commit("task.move", outcome, task_id=task_id, direction=direction,
                                      stage=getattr(outcome, "stage", None))

    async def drop_task(self, task_id: int, stage: Stage):
        async with self._lock:
            return await self._drop(task_id, stage)

    async def _drop(self, task_id: int, stage: Stage):
        outcome = self.store.move_to(task_id, stage)
        return await self._commit("task.drop", outcome, task_id=task_id, stage=Stage(stage).value)

    async def delete_task(self, task_id: int):
        async with self._lock:
            outcome = self.store.remove(task_id)
            return await self._commit("task.delete", outcome, task_id=task_id)

    async def clear_all(self):
        # confirmation is the caller's job; this runs immediately
        async with self._lock:
            outcome = self.store.clear_all()
            return await self._commit("board.clear", outcome, count=getattr(outcome, "count", 0))

    # -------------------- drag session --------------------
    async def begin_drag(self, task_id: int) -> None:
        async with self._lock:
            self.drag.begin(task_id)
        logger.debug("drag.begin", extra={"category": "drag", "event": "drag.begin", "task_id": task_id})

    async def end_drag(self) -> None:
        async with self._lock:
            self.drag.end()
        logger.debug("drag.end", extra={"category": "drag", "event": "drag.end"})

    async def drop_dragged(self, stage: Stage):
        """Resolve the current drag against `stage` and apply it.

        A drop with nothing being dragged is a no-op for the caller. The
        session stays dragging until end_drag().
        """
        async with self._lock:
            request = self.drag.resolve_drop(stage)
            if not isinstance(request, DropRequest):
                logger.debug("drag.drop_rejected", extra={"category": "drag", "event": "drag.drop_rejected"})
                return NoOp(request.reason)
            return await self._drop(request.task_id, request.stage)

    # -------------------- view --------------------
    def board_view(self) -> BoardView:
        return build_board_view(self.store.tasks())

    def render(self) -> str:
        return render_board(self.board_view())

    def board_state(self) -> dict:
        tasks = self.store.tasks()
        return {
            **self.store.snapshot().to_record(),
            "counts": {stage.value: n for stage, n in count_by_stage(tasks).items()},
            "total": len(tasks),
        }
