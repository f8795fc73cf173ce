"""Settings loaded from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from kanban_board.infra.persistence import STORE_KEY

STORAGE_BACKENDS = ("sqlite", "memory")


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    db_path: str = "./data/kanban.db"
    storage: str = "sqlite"
    store_key: str = STORE_KEY
    log_level: str = "INFO"
    log_dir: str = "./logs"
    host: str = "127.0.0.1"
    port: int = 8000


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(override=False)
    storage = _env("STORAGE", "sqlite").lower()
    if storage not in STORAGE_BACKENDS:
        storage = "sqlite"
    return Settings(
        db_path=_env("DB_PATH", Settings.db_path),
        storage=storage,
        store_key=_env("STORE_KEY", STORE_KEY),
        log_level=_env("LOG_LEVEL", Settings.log_level).upper(),
        log_dir=_env("LOG_DIR", Settings.log_dir),
        host=_env("HOST", Settings.host),
        port=_env_int("PORT", Settings.port),
    )
