"""Abstract base class for key-value store backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKeyValueStore(ABC):
    """Async key-value interface holding JSON-compatible values."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Value stored under ``key``, or ``default`` when absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        ...
