"""Key-value stores and the session archive built on them."""

from focus_insights.storage.archive import SessionArchive
from focus_insights.storage.base import BaseKeyValueStore
from focus_insights.storage.json_file import JsonFileStore
from focus_insights.storage.memory import InMemoryKeyValueStore

__all__ = ["SessionArchive", "BaseKeyValueStore", "JsonFileStore", "InMemoryKeyValueStore"]
