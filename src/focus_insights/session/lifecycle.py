"""Single-session tracking state: Idle -> Active -> Idle."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from focus_insights.classifier.models import Visit
from focus_insights.exceptions import SessionStateError
from focus_insights.session.models import CompletedSession
from focus_insights.utils import parse_timestamp, to_iso

logger = logging.getLogger(__name__)

_IGNORED_PREFIXES = ("about:", "moz-extension:", "chrome:", "chrome-extension:")


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


def generate_session_id() -> str:
    return f"session_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _as_utc(now: datetime | None) -> datetime:
    """Current time, or ``now`` with naive values taken as UTC."""
    return parse_timestamp(now) if now is not None else datetime.now(timezone.utc)


class FocusSession:
    """Owns the visit buffer of the one active session.

    The buffer is only reachable through this object while the session is
    active; ``stop`` hands it over as an immutable tuple.
    """

    def __init__(self) -> None:
        self.state = SessionState.IDLE
        self.session_id: str | None = None
        self._started_at: datetime | None = None
        self._visits: list[Visit] = []
        self._ticker: asyncio.Task | None = None

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def visit_count(self) -> int:
        return len(self._visits)

    def start(self, now: datetime | None = None) -> str:
        """Begin tracking; returns the new session id."""
        if self.is_active:
            raise SessionStateError(f"Session {self.session_id} is already active")
        self.session_id = generate_session_id()
        self._started_at = _as_utc(now)
        self._visits = []
        self.state = SessionState.ACTIVE
        logger.info("Started session %s", self.session_id)
        return self.session_id

    def record_visit(self, url: str, title: str = "", timestamp: datetime | str | None = None) -> bool:
        """Append a visit to the active session; internal pages are skipped."""
        if not self.is_active:
            return False
        if not url or url.startswith(_IGNORED_PREFIXES):
            return False
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        if isinstance(timestamp, datetime):
            timestamp = to_iso(timestamp)
        self._visits.append(Visit(url=url, title=title or "Unknown", timestamp=timestamp))
        logger.debug("Recorded visit %s", url)
        return True

    def elapsed_seconds(self, now: datetime | None = None) -> int:
        if not self.is_active or self._started_at is None:
            return 0
        return max(0, int((_as_utc(now) - self._started_at).total_seconds()))

    def stop(self, now: datetime | None = None) -> CompletedSession:
        """End tracking and hand over the collected visits."""
        if not self.is_active or self._started_at is None or self.session_id is None:
            raise SessionStateError("No active session to stop")
        self.cancel_elapsed_updates()
        ended_at = _as_utc(now)
        completed = CompletedSession(
            session_id=self.session_id,
            start_time=to_iso(self._started_at),
            end_time=to_iso(ended_at),
            visits=tuple(self._visits),
        )
        logger.info(
            "Stopped session %s after %ss with %d visits",
            self.session_id, self.elapsed_seconds(ended_at), len(completed.visits),
        )
        self._visits = []
        self._started_at = None
        self.session_id = None
        self.state = SessionState.IDLE
        return completed

    def start_elapsed_updates(
        self,
        callback: Callable[[int], None],
        interval: float = 1.0,
    ) -> asyncio.Task:
        """Call ``callback(elapsed_seconds)`` every ``interval`` seconds until stopped.

        Must be called from a running event loop.
        """
        if not self.is_active:
            raise SessionStateError("Elapsed updates need an active session")
        self.cancel_elapsed_updates()
        self._ticker = asyncio.get_running_loop().create_task(self._tick(callback, interval))
        return self._ticker

    def cancel_elapsed_updates(self) -> None:
        if self._ticker is not None and not self._ticker.done():
            self._ticker.cancel()
        self._ticker = None

    async def _tick(self, callback: Callable[[int], None], interval: float) -> None:
        while self.is_active:
            callback(self.elapsed_seconds())
            await asyncio.sleep(interval)
