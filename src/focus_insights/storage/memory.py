"""In-process key-value store, mostly for tests and ephemeral use."""

from __future__ import annotations

import copy
from typing import Any

from focus_insights.storage.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Dict-backed store. Values are deep-copied in and out, like a real backend."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
