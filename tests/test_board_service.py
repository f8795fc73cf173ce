# tests/test_board_service.py

from __future__ import annotations

import asyncio
import json

import pytest

from kanban_board.domain.drag_session import DragState
from kanban_board.domain.outcomes import Added, Moved, NoOp, Rejected
from kanban_board.domain.task_models import Stage
from kanban_board.domain.task_store import TaskStore
from kanban_board.infra.persistence import STORE_KEY, SnapshotPersistence, seed_snapshot
from kanban_board.services.board_service import BoardService

from .fakes import TODAY, BrokenKeyValueStore, CountingKeyValueStore


async def _stored(kv) -> dict:
    return json.loads(await kv.get(STORE_KEY))


@pytest.mark.asyncio
async def test_start_seeds_and_writes_back(service: BoardService, kv: CountingKeyValueStore):
    await service.start()
    assert len(service.store) == 5
    assert kv.writes == 1
    assert (await _stored(kv))["nextId"] == 10


@pytest.mark.asyncio
async def test_start_restores_saved_board(kv: CountingKeyValueStore):
    first = BoardService(SnapshotPersistence(kv), store=TaskStore(clock=lambda: TODAY))
    await first.start()
    await first.add_task("carry over")

    second = BoardService(SnapshotPersistence(kv))
    await second.start()
    assert [t.title for t in second.store.tasks()][-1] == "carry over"
    assert second.store.next_id == 11


@pytest.mark.asyncio
async def test_mutations_persist(service: BoardService, kv: CountingKeyValueStore):
    await service.start()
    writes = kv.writes

    added = await service.add_task("Write tests", "")
    assert isinstance(added, Added)
    assert added.task.id == 10
    assert kv.writes == writes + 1

    moved = await service.move_task(10, 1)
    assert isinstance(moved, Moved)
    assert moved.message == "→ Moved to In Progress"
    stored = await _stored(kv)
    assert {"id": 10, "title": "Write tests", "desc": "", "col": "progress", "date": "Oct 19"} in stored["tasks"]
    assert stored["nextId"] == 11


@pytest.mark.asyncio
async def test_noops_do_not_write(service: BoardService, kv: CountingKeyValueStore):
    await service.start()
    writes = kv.writes

    rejected = await service.add_task("   ", "desc")
    assert isinstance(rejected, Rejected)
    assert rejected.message == "Please enter a task title"

    assert (await service.move_task(1, -1)).message is None
    assert (await service.move_task(5, 1)).message is None
    for _ in range(2):
        assert isinstance(await service.drop_task(4, Stage.progress), NoOp)
    assert isinstance(await service.delete_task(404), NoOp)

    assert kv.writes == writes
    assert len(service.store) == 5


@pytest.mark.asyncio
async def test_delete_and_clear(service: BoardService, kv: CountingKeyValueStore):
    await service.start()
    assert (await service.delete_task(1)).message == "Task deleted"
    assert isinstance(await service.delete_task(1), NoOp)

    cleared = await service.clear_all()
    assert cleared.message == "Board cleared"
    assert await _stored(kv) == {"tasks": [], "nextId": 1}

    writes = kv.writes
    assert isinstance(await service.clear_all(), NoOp)
    assert kv.writes == writes
    assert (await service.add_task("fresh")).task.id == 1


@pytest.mark.asyncio
async def test_drag_and_drop_flow(service: BoardService, kv: CountingKeyValueStore):
    await service.start()

    await service.begin_drag(2)
    assert service.drag.state is DragState.dragging
    moved = await service.drop_dragged(Stage.done)
    assert isinstance(moved, Moved)
    assert service.store.get(2).stage is Stage.done
    await service.end_drag()
    assert service.drag.state is DragState.idle

    # dropped back into its own column
    await service.begin_drag(2)
    writes = kv.writes
    assert isinstance(await service.drop_dragged(Stage.done), NoOp)
    assert kv.writes == writes
    await service.end_drag()


@pytest.mark.asyncio
async def test_drop_without_drag_is_noop(service: BoardService):
    await service.start()
    outcome = await service.drop_dragged(Stage.done)
    assert isinstance(outcome, NoOp)
    assert outcome.message is None


@pytest.mark.asyncio
async def test_abandoned_drag_returns_to_idle(service: BoardService):
    await service.start()
    await service.begin_drag(3)
    await service.end_drag()
    assert service.drag.state is DragState.idle
    await service.begin_drag(1)
    assert service.drag.task_id == 1


@pytest.mark.asyncio
async def test_storage_failure_keeps_board_usable():
    svc = BoardService(SnapshotPersistence(BrokenKeyValueStore()), store=TaskStore(clock=lambda: TODAY))
    await svc.start()
    assert svc.store.snapshot() == seed_snapshot()
    added = await svc.add_task("still works")
    assert added.task.id == 10
    assert len(svc.store) == 6


@pytest.mark.asyncio
async def test_concurrent_commands_each_complete(service: BoardService, kv: CountingKeyValueStore):
    await service.start()
    results = await asyncio.gather(*(service.add_task(f"t{i}") for i in range(5)))
    assert sorted(r.task.id for r in results) == [10, 11, 12, 13, 14]
    assert (await _stored(kv))["nextId"] == 15


@pytest.mark.asyncio
async def test_render_follows_store(service: BoardService):
    await service.start()
    await service.add_task("<em>new</em>")
    html = service.render()
    assert "&lt;em&gt;new&lt;/em&gt;" in html
    assert "6 tasks" in html

    state = service.board_state()
    assert state["counts"] == {"todo": 4, "progress": 1, "done": 1}
    assert state["total"] == 6
    assert state["nextId"] == 11
