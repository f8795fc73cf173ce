"""
Snapshot persistence on top of a key-value backend.

The whole board lives under one key as JSON:

    {"tasks": [{"id", "title", "desc", "col", "date"}, ...], "nextId": 10}

Loading never fails: a missing, unreadable or malformed record yields the
seed board. Saving never fails either: backend errors are logged and the
in-memory board stays authoritative for the session.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from kanban_board.domain.task_models import Snapshot, Stage, Task
from kanban_board.infra.db.errors import StorageError

logger = logging.getLogger("kanban.storage")

STORE_KEY = "kanban_editorial_v1"

SEED_TASKS = (
    (1, "Build Api", "Setup Node.js and Express for the backend", Stage.todo, "Feb 20"),
    (2, "Register Page", "Create register page with React", Stage.todo, "Feb 21"),
    (3, "Integrate Login", "Connect Login APIs to the frontend", Stage.todo, "Feb 22"),
    (4, "Login Page", "Create Login page with React", Stage.progress, "Feb 23"),
    (5, "Initiate Project", "Setup the environment for the MERN project", Stage.done, "Feb 18"),
)
SEED_NEXT_ID = 10


def seed_snapshot() -> Snapshot:
    tasks = [
        Task(id=i, title=title, description=desc, stage=stage, date=day)
        for i, title, desc, stage, day in SEED_TASKS
    ]
    return Snapshot(tasks=tasks, next_id=SEED_NEXT_ID)


def dump_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(snapshot.to_record(), ensure_ascii=False)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_snapshot(raw: str) -> Optional[Snapshot]:
    """Parse a stored record; None when the top-level shape is wrong.

    Individual task entries degrade on their own: unusable ones are
    dropped, missing desc/date default to "", duplicate ids keep the first.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    items = data.get("tasks")
    next_id = data.get("nextId")
    if not isinstance(items, list) or not _is_int(next_id):
        return None

    tasks: List[Task] = []
    seen = set()
    for raw_task in items:
        if not isinstance(raw_task, dict):
            continue
        try:
            task = Task.model_validate({
                "id": raw_task.get("id"),
                "title": raw_task.get("title"),
                "desc": raw_task.get("desc") or "",
                "col": raw_task.get("col"),
                "date": raw_task.get("date") or "",
            })
        except ValidationError as e:
            logger.warning(
                "storage.task_dropped",
                extra={"category": "storage", "event": "storage.task_dropped",
                       "task_id": raw_task.get("id"), "errors": e.error_count()},
            )
            continue
        if task.id in seen:
            continue
        seen.add(task.id)
        tasks.append(task)

    floor = max(seen, default=0) + 1
    return Snapshot(tasks=tasks, next_id=max(next_id, floor))


class SnapshotPersistence:
    def __init__(self, kv, key: str = STORE_KEY):
        self.kv = kv
        self.key = key

    async def load(self) -> Snapshot:
        try:
            raw = await self.kv.get(self.key)
        except StorageError as e:
            logger.warning(
                "storage.read_failed",
                extra={"category": "storage", "event": "storage.read_failed", "key": self.key, "error": str(e)},
            )
            return seed_snapshot()

        if raw is None:
            logger.info("storage.empty", extra={"category": "storage", "event": "storage.empty", "key": self.key})
            return seed_snapshot()

        snapshot = parse_snapshot(raw)
        if snapshot is None:
            logger.warning("storage.corrupt", extra={"category": "storage", "event": "storage.corrupt", "key": self.key})
            return seed_snapshot()

        logger.info(
            "storage.loaded",
            extra={"category": "storage", "event": "storage.loaded", "key": self.key,
                   "tasks": len(snapshot.tasks), "next_id": snapshot.next_id},
        )
        return snapshot

    async def save(self, snapshot: Snapshot) -> None:
        try:
            await self.kv.set(self.key, dump_snapshot(snapshot))
        except StorageError as e:
            logger.warning(
                "storage.save_failed",
                extra={"category": "storage", "event": "storage.save_failed", "key": self.key, "error": str(e)},
            )
            return
        logger.debug(
            "storage.saved",
            extra={"category": "storage", "event": "storage.saved", "key": self.key,
                   "tasks": len(snapshot.tasks), "next_id": snapshot.next_id},
        )
