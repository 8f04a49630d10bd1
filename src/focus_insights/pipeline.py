"""Turn a completed session into a stored summary with an insight."""

from __future__ import annotations

import logging

from focus_insights.exceptions import StorageReadError
from focus_insights.insights.dispatcher import InsightDispatcher, InsightResult
from focus_insights.session.metrics import SessionFocusAnalyzer, build_session_summary
from focus_insights.session.models import CompletedSession, SessionSummary
from focus_insights.storage.archive import SessionArchive

logger = logging.getLogger(__name__)


class SessionPipeline:
    """Summarize, dispatch and archive one session at a time.

    ``focus_analyzer`` is optional; without it summaries carry no focus report.
    """

    def __init__(
        self,
        archive: SessionArchive,
        dispatcher: InsightDispatcher | None = None,
        focus_analyzer: SessionFocusAnalyzer | None = None,
    ):
        self.archive = archive
        self.dispatcher = dispatcher or InsightDispatcher()
        self.focus_analyzer = focus_analyzer
        self.last_result: InsightResult | None = None
        self.last_summary: SessionSummary | None = None

    async def finalize(self, completed: CompletedSession) -> SessionSummary | None:
        """Build, annotate and save the summary; ``None`` for an empty session.

        Raises:
            StorageWriteError: the summary could not be saved. It is still
                available as ``last_summary``.
        """
        if not completed.visits:
            logger.info("Session %s recorded no visits; nothing to save", completed.session_id)
            return None

        summary = build_session_summary(
            completed.session_id,
            completed.start_time,
            completed.end_time,
            completed.visits,
            focus_analyzer=self.focus_analyzer,
        )
        logger.info(
            "Session %s: %s, %d visits, %d%% productive, %d focus switches",
            summary.session_id,
            summary.duration.formatted,
            summary.metrics.total_visits,
            summary.metrics.productive_percentage,
            summary.metrics.focus_switches,
        )

        try:
            history = await self.archive.load_sessions()
            total_sessions = await self.archive.session_count()
        except StorageReadError as e:
            logger.warning("Could not read session history (%s); continuing without it", e)
            history = []
            total_sessions = 0

        result = await self.dispatcher.dispatch(summary, history, total_sessions)
        summary.ai_insight = result.text
        summary.is_ai_generated = result.is_ai_generated
        self.last_result = result
        self.last_summary = summary

        await self.archive.save_session(summary)
        return summary
