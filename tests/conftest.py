# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from kanban_board.config import Settings
from kanban_board.domain.task_store import TaskStore
from kanban_board.infra.persistence import SnapshotPersistence, seed_snapshot
from kanban_board.services.board_service import BoardService

from .fakes import TODAY, CountingKeyValueStore


@pytest.fixture()
def store() -> TaskStore:
    """Empty store with a fixed clock."""
    return TaskStore(clock=lambda: TODAY)


@pytest.fixture()
def seeded_store() -> TaskStore:
    return TaskStore(seed_snapshot(), clock=lambda: TODAY)


@pytest.fixture()
def kv() -> CountingKeyValueStore:
    return CountingKeyValueStore()


@pytest.fixture()
def persistence(kv: CountingKeyValueStore) -> SnapshotPersistence:
    return SnapshotPersistence(kv)


@pytest.fixture()
def service(persistence: SnapshotPersistence) -> BoardService:
    return BoardService(persistence, store=TaskStore(clock=lambda: TODAY))


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        db_path=str(tmp_path / "kanban.db"),
        storage="sqlite",
        log_level="DEBUG",
        log_dir=str(tmp_path / "logs"),
    )
