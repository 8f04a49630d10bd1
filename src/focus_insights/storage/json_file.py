"""Key-value store persisted as a single JSON document on disk."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from focus_insights.exceptions import StorageReadError, StorageWriteError
from focus_insights.storage.base import BaseKeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(BaseKeyValueStore):
    """Every operation reads (and, for writes, rewrites) the whole file.

    File I/O runs in a worker thread via ``asyncio.to_thread``. Writes go to a
    sibling temp file first and replace the target atomically.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    async def get(self, key: str, default: Any = None) -> Any:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._update, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageReadError(f"Expected a JSON object in {self.path}, got {type(data).__name__}")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e
        logger.debug("Wrote %d keys to %s", len(data), self.path)

    def _update(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
