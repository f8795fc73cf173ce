from __future__ import annotations
from typing import Dict, Optional


class InMemoryKeyValueStore:
    """
    Dict-backed key-value store. Same async surface as SQLiteKeyValueStore,
    used by tests and by STORAGE=memory (board lives for the process only).
    """
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
