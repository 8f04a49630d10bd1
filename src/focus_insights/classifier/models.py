"""Data models for the domain classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    PRODUCTIVE = "productive"
    DISTRACTING = "distracting"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Visit:
    """One tab visit recorded during a session."""

    url: str
    title: str
    timestamp: str  # ISO 8601

    def to_dict(self) -> dict:
        return {"url": self.url, "title": self.title, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict) -> Visit:
        return cls(
            url=data.get("url") or "",
            title=data.get("title") or "",
            timestamp=data.get("timestamp") or "",
        )


@dataclass(frozen=True)
class CategorizedVisit(Visit):
    """A visit with its extracted domain and category."""

    domain: str = ""
    category: Category = Category.NEUTRAL
