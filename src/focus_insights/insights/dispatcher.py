"""Decide between a local template and an external AI insight for a finished session."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from focus_insights.exceptions import InsightGenerationError
from focus_insights.history.models import HistoricalContext
from focus_insights.history.patterns import build_historical_context, recent_rated_sessions
from focus_insights.insights.local import generate_fallback_insight, generate_local_insight
from focus_insights.insights.prompts import SYSTEM_PROMPT, build_session_prompt
from focus_insights.session.models import SessionSummary
from focus_insights.utils import mean

logger = logging.getLogger(__name__)

LOCAL_INSIGHT = "local-insight"
AI_INSIGHT = "ai-insight"


@dataclass
class DispatchPolicy:
    """Thresholds for the dispatch rules."""

    short_session_minutes: int = 10
    simple_session_visits: int = 5
    complex_focus_switches: int = 5
    min_historical_sessions: int = 3
    history_window: int = 5
    significant_change_points: float = 20
    milestone_every: int = 10


@dataclass(frozen=True)
class DispatchDecision:
    is_short_session: bool
    is_simple_session: bool
    has_historical_context: bool
    is_significant_change: bool
    is_milestone_session: bool
    is_complex_session: bool

    @property
    def should_use_ai(self) -> bool:
        return self.is_complex_session or self.is_significant_change or self.is_milestone_session


def evaluate_dispatch(
    summary: SessionSummary,
    recent_rated: Sequence[SessionSummary],
    total_sessions: int,
    policy: DispatchPolicy | None = None,
) -> DispatchDecision:
    """Apply the dispatch rules to one session.

    ``recent_rated`` holds the most recent rated sessions, and
    ``total_sessions`` counts the sessions saved before this one.
    """
    policy = policy or DispatchPolicy()
    metrics = summary.metrics

    is_short = summary.duration.minutes < policy.short_session_minutes
    is_simple = metrics.total_visits < policy.simple_session_visits
    has_history = len(recent_rated) >= policy.min_historical_sessions

    significant = False
    milestone = False
    if has_history:
        historical_productivity = mean([s.metrics.productive_percentage for s in recent_rated])
        significant = (
            abs(metrics.productive_percentage - historical_productivity) > policy.significant_change_points
        )
        milestone = total_sessions > 0 and total_sessions % policy.milestone_every == 0

    is_complex = (
        not is_short
        and not is_simple
        and (
            metrics.focus_switches >= policy.complex_focus_switches
            or (metrics.distracting_visits > 0 and metrics.productive_visits > 0)
        )
    )

    return DispatchDecision(
        is_short_session=is_short,
        is_simple_session=is_simple,
        has_historical_context=has_history,
        is_significant_change=significant,
        is_milestone_session=milestone,
        is_complex_session=is_complex,
    )


class InsightGenerator(Protocol):
    async def generate_insight(
        self,
        summary: SessionSummary,
        history: HistoricalContext | None = None,
    ) -> str: ...


class LLMInsightGenerator:
    """Narrative insights from Claude.

    Builds its own ``AsyncLLMClient`` when none is passed, which needs the
    ``llm`` extra and ``ANTHROPIC_API_KEY``. An empty reply raises
    ``InsightGenerationError`` from the client.
    """

    def __init__(self, client=None, max_tokens: int = 500, temperature: float = 0.7):
        if client is None:
            from focus_insights.llm.client import AsyncLLMClient

            client = AsyncLLMClient()
        self.client = client
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate_insight(
        self,
        summary: SessionSummary,
        history: HistoricalContext | None = None,
    ) -> str:
        return await self.client.generate_text(
            SYSTEM_PROMPT,
            build_session_prompt(summary, history),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one external generation attempt: text or the error that stopped it."""

    text: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


@dataclass(frozen=True)
class InsightResult:
    text: str
    is_ai_generated: bool
    outcome: str
    decision: DispatchDecision
    error: Exception | None = None


class InsightDispatcher:
    """Route each session to the local template or the injected generator.

    The generator's failures never reach the caller: they fall back to a
    deterministic text and the result is marked as not AI-generated.
    """

    def __init__(
        self,
        generator: InsightGenerator | None = None,
        policy: DispatchPolicy | None = None,
    ):
        self.generator = generator
        self.policy = policy or DispatchPolicy()

    async def dispatch(
        self,
        summary: SessionSummary,
        archive_sessions: Sequence[SessionSummary],
        total_sessions: int,
    ) -> InsightResult:
        recent = recent_rated_sessions(archive_sessions, self.policy.history_window)
        decision = evaluate_dispatch(summary, recent, total_sessions, self.policy)

        if not decision.should_use_ai:
            logger.info("Session %s: simple session, using local insight", summary.session_id)
            return InsightResult(
                text=generate_local_insight(summary),
                is_ai_generated=False,
                outcome=LOCAL_INSIGHT,
                decision=decision,
            )

        if self.generator is None:
            logger.info("Session %s: no insight generator configured, using local insight", summary.session_id)
            return InsightResult(
                text=generate_local_insight(summary),
                is_ai_generated=False,
                outcome=LOCAL_INSIGHT,
                decision=decision,
            )

        history = None
        if decision.has_historical_context:
            history = build_historical_context(archive_sessions, self.policy.history_window)
        if decision.is_significant_change:
            logger.info("Session %s: significant productivity change", summary.session_id)
        if decision.is_milestone_session:
            logger.info("Session %s: milestone session #%d", summary.session_id, total_sessions)

        result = await self._request(summary, history)
        if result.ok:
            return InsightResult(
                text=result.text,
                is_ai_generated=True,
                outcome=AI_INSIGHT,
                decision=decision,
            )

        logger.warning("Session %s: AI insight failed (%s), using fallback", summary.session_id, result.error)
        return InsightResult(
            text=generate_fallback_insight(summary),
            is_ai_generated=False,
            outcome=LOCAL_INSIGHT,
            decision=decision,
            error=result.error,
        )

    async def _request(self, summary: SessionSummary, history: HistoricalContext | None) -> GenerationResult:
        try:
            text = await self.generator.generate_insight(summary, history)
        except Exception as e:
            return GenerationResult(error=e)
        if not isinstance(text, str) or not text.strip():
            return GenerationResult(error=InsightGenerationError("Generator returned no text"))
        return GenerationResult(text=text.strip())
