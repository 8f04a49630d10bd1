"""Bounded archive of session summaries on top of a key-value store."""

from __future__ import annotations

import logging
from typing import Any

from focus_insights.exceptions import (
    SessionNotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from focus_insights.history.patterns import recent_rated_sessions
from focus_insights.session.models import SessionSummary, UserRating
from focus_insights.storage.base import BaseKeyValueStore

logger = logging.getLogger(__name__)

SESSIONS_KEY = "sessions"
LATEST_KEY = "latestSession"
COUNT_KEY = "sessionCount"
DEFAULT_MAX_SESSIONS = 50


class SessionArchive:
    """Chronological session list capped at ``max_sessions`` (oldest evicted first).

    The latest session is also kept under its own key, and a separate counter
    tracks every session ever saved so it keeps growing after eviction starts.
    """

    def __init__(self, store: BaseKeyValueStore, max_sessions: int = DEFAULT_MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.store = store
        self.max_sessions = max_sessions

    async def load_sessions(self) -> list[SessionSummary]:
        raw = await self._get(SESSIONS_KEY, [])
        return [SessionSummary.from_dict(item) for item in raw or [] if isinstance(item, dict)]

    async def get_latest(self) -> SessionSummary | None:
        raw = await self._get(LATEST_KEY)
        return SessionSummary.from_dict(raw) if isinstance(raw, dict) else None

    async def session_count(self) -> int:
        count = await self._get(COUNT_KEY)
        if isinstance(count, int):
            return count
        raw = await self._get(SESSIONS_KEY, [])
        return len(raw or [])

    async def recent_rated_sessions(self, limit: int = 5) -> list[SessionSummary]:
        return recent_rated_sessions(await self.load_sessions(), limit)

    async def save_session(self, summary: SessionSummary) -> int:
        """Append ``summary``, evict past the cap and overwrite the latest record.

        Returns the total number of sessions saved so far.
        """
        raw = await self._get(SESSIONS_KEY, []) or []
        count = await self.session_count()

        record = summary.to_dict()
        raw.append(record)
        evicted = max(0, len(raw) - self.max_sessions)
        if evicted:
            raw = raw[evicted:]
            logger.debug("Evicted %d oldest sessions from archive", evicted)

        await self._set(SESSIONS_KEY, raw)
        await self._set(LATEST_KEY, record)
        await self._set(COUNT_KEY, count + 1)
        logger.info("Saved session %s (%d archived, %d total)", summary.session_id, len(raw), count + 1)
        return count + 1

    async def attach_rating(self, session_id: str, rating: UserRating) -> SessionSummary:
        """Store ``rating`` on the archived session and on the latest record if it matches."""
        raw = await self._get(SESSIONS_KEY, []) or []
        latest = await self._get(LATEST_KEY)
        rating_data = rating.to_dict()

        updated: dict | None = None
        for item in raw:
            if isinstance(item, dict) and item.get("sessionId") == session_id:
                item["userRating"] = rating_data
                updated = item
        if updated is not None:
            await self._set(SESSIONS_KEY, raw)

        if isinstance(latest, dict) and latest.get("sessionId") == session_id:
            latest["userRating"] = rating_data
            await self._set(LATEST_KEY, latest)
            updated = updated or latest

        if updated is None:
            raise SessionNotFoundError(f"No archived session with id {session_id}")
        logger.info(
            "Session %s %s", session_id,
            "rating skipped" if rating.skipped else f"rated {rating.stars} stars",
        )
        return SessionSummary.from_dict(updated)

    async def _get(self, key: str, default: Any = None) -> Any:
        try:
            return await self.store.get(key, default)
        except StorageError:
            raise
        except Exception as e:
            raise StorageReadError(f"Failed to read {key!r}: {e}") from e

    async def _set(self, key: str, value: Any) -> None:
        try:
            await self.store.set(key, value)
        except StorageError:
            raise
        except Exception as e:
            raise StorageWriteError(f"Failed to write {key!r}: {e}") from e
