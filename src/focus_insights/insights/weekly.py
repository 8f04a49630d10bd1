"""Seven-day summary across archived sessions."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from focus_insights.history.patterns import rated_sessions
from focus_insights.insights.prompts import SYSTEM_PROMPT, build_weekly_prompt
from focus_insights.session.models import SessionSummary
from focus_insights.utils import mean, parse_timestamp, round_half_up

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7
MIN_RATED_SESSIONS = 3
MIN_RATED_FOR_TREND = 4
TREND_THRESHOLD = 0.2
STRONG_TREND_THRESHOLD = 0.5
CONSISTENT_RATING = 3.5


@dataclass
class WeeklyStats:
    total_sessions: int
    rated_sessions: int
    total_minutes: int
    average_rating: float
    average_productivity: int
    average_focus_switches: float
    trend_direction: str
    best_stars: int
    best_productivity: int
    worst_stars: int
    worst_productivity: int
    top_domains: list[str] = field(default_factory=list)


@dataclass
class WeeklySummary:
    text: str
    is_ai_generated: bool
    stats: WeeklyStats


def sessions_in_window(
    sessions: Sequence[SessionSummary],
    now: datetime | None = None,
    days: int = WINDOW_DAYS,
) -> list[SessionSummary]:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=days)
    selected = []
    for session in sessions:
        started = parse_timestamp(session.start_time)
        if started is not None and started >= cutoff:
            selected.append(session)
    return selected


def weekly_trend(rated: Sequence[SessionSummary]) -> str:
    """Compare the first and second half of the week's rated sessions."""
    if len(rated) < MIN_RATED_FOR_TREND:
        return "stable"
    half = len(rated) // 2
    first = mean([s.stars for s in rated[:half]])
    second = mean([s.stars for s in rated[half:]])
    if second > first + STRONG_TREND_THRESHOLD:
        return "improving significantly"
    if second > first + TREND_THRESHOLD:
        return "improving"
    if second < first - STRONG_TREND_THRESHOLD:
        return "declining significantly"
    if second < first - TREND_THRESHOLD:
        return "declining"
    return "stable"


def compute_weekly_stats(weekly: Sequence[SessionSummary]) -> WeeklyStats | None:
    rated = rated_sessions(weekly)
    if not weekly or len(rated) < MIN_RATED_SESSIONS:
        return None

    best = rated[0]
    worst = rated[0]
    for session in rated[1:]:
        if session.stars > best.stars:
            best = session
        if session.stars < worst.stars:
            worst = session

    domains: Counter[str] = Counter()
    for session in weekly:
        for item in session.top_domains:
            domains[item.domain] += item.count

    return WeeklyStats(
        total_sessions=len(weekly),
        rated_sessions=len(rated),
        total_minutes=sum(s.duration.minutes for s in weekly),
        average_rating=mean([s.stars for s in rated]),
        average_productivity=round_half_up(mean([s.metrics.productive_percentage for s in weekly])),
        average_focus_switches=mean([s.metrics.focus_switches for s in weekly]),
        trend_direction=weekly_trend(rated),
        best_stars=best.stars,
        best_productivity=best.metrics.productive_percentage,
        worst_stars=worst.stars,
        worst_productivity=worst.metrics.productive_percentage,
        top_domains=[domain for domain, _ in domains.most_common(3)],
    )


def fallback_weekly_text(stats: WeeklyStats) -> str:
    hours, minutes = divmod(stats.total_minutes, 60)
    if stats.average_rating >= CONSISTENT_RATING:
        tone = "Great consistency! You're building strong study habits."
    else:
        tone = "You're tracking your progress, and that's the first step to improvement."
    return (
        f"This week you completed {stats.total_sessions} study sessions totaling {hours}h {minutes}m "
        f"with an average rating of {stats.average_rating:.1f} stars. {tone} Keep rating your sessions "
        "to unlock deeper AI-powered insights about what helps you focus best."
    )


class WeeklySummarizer:
    """Weekly narrative over the last seven days of sessions.

    ``client`` is an ``AsyncLLMClient`` (or anything with the same
    ``generate_text`` coroutine); without one the deterministic text is used.
    """

    def __init__(self, client=None, max_tokens: int = 500, temperature: float = 0.8):
        self.client = client
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def summarize(
        self,
        sessions: Sequence[SessionSummary],
        now: datetime | None = None,
    ) -> WeeklySummary | None:
        weekly = sessions_in_window(sessions, now)
        stats = compute_weekly_stats(weekly)
        if stats is None:
            logger.debug("Not enough rated sessions for a weekly summary (%d in range)", len(weekly))
            return None

        if self.client is None:
            return WeeklySummary(text=fallback_weekly_text(stats), is_ai_generated=False, stats=stats)

        try:
            text = await self.client.generate_text(
                SYSTEM_PROMPT,
                build_weekly_prompt(stats),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Weekly AI summary failed (%s), using fallback", e)
            text = ""

        if not text:
            return WeeklySummary(text=fallback_weekly_text(stats), is_ai_generated=False, stats=stats)
        return WeeklySummary(text=text, is_ai_generated=True, stats=stats)
