"""Trend, pattern, correlation and time-of-day analysis over archived sessions.

Rating-dependent statistics only consider rated sessions: a star rating is
present and the rating was not skipped. Every function returns ``None`` (or
an empty collection) when there is not enough data.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone

from focus_insights.history.models import (
    HistoricalContext,
    HistoryComparison,
    HourCount,
    HourlyProductivity,
    MetricComparison,
    MetricGap,
    PatternSummary,
    RatingCorrelations,
    SessionTrends,
    TagCount,
    TimeOfDay,
    TimePeriodStats,
)
from focus_insights.session.models import SessionSummary
from focus_insights.utils import local_hour, mean, parse_timestamp, round_half_up

logger = logging.getLogger(__name__)

TREND_WINDOW = 3
TREND_THRESHOLD = 0.3
MIN_RATED_FOR_PATTERNS = 3
MIN_RATED_FOR_CORRELATIONS = 5
HIGH_RATING = 4
LOW_RATING = 2
COMMON_TAG_MIN_COUNT = 2
COMMON_TAG_SHARE = 0.4
MIN_SESSIONS_PER_PERIOD = 2

TIME_RANGES = {
    "morning": "6am - 12pm",
    "afternoon": "12pm - 6pm",
    "evening": "6pm - 12am",
    "night": "12am - 6am",
}


def rated_sessions(sessions: Sequence[SessionSummary]) -> list[SessionSummary]:
    return [s for s in sessions if s.is_rated]


def recent_rated_sessions(sessions: Sequence[SessionSummary], limit: int = 5) -> list[SessionSummary]:
    """Rated sessions, newest start time first."""
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(
        rated_sessions(sessions),
        key=lambda s: parse_timestamp(s.start_time) or epoch,
        reverse=True,
    )
    return ordered[:max(0, limit)]


def analyze_session_trends(sessions: Sequence[SessionSummary]) -> SessionTrends | None:
    """Overall averages and the direction of recent ratings.

    The trend compares the last three rated sessions with the three before
    them and stays "stable" until six rated sessions exist.
    """
    if not sessions:
        return None
    rated = rated_sessions(sessions)
    if not rated:
        return None

    trend = "stable"
    if len(rated) >= TREND_WINDOW * 2:
        recent_avg = mean([s.stars for s in rated[-TREND_WINDOW:]])
        previous_avg = mean([s.stars for s in rated[-TREND_WINDOW * 2:-TREND_WINDOW]])
        if recent_avg > previous_avg + TREND_THRESHOLD:
            trend = "improving"
        elif recent_avg < previous_avg - TREND_THRESHOLD:
            trend = "declining"

    return SessionTrends(
        total_sessions=len(sessions),
        rated_sessions=len(rated),
        average_rating=round_half_up(mean([s.stars for s in rated]), 1),
        average_duration=round_half_up(mean([s.duration.minutes for s in sessions])),
        average_productivity=round_half_up(mean([s.metrics.productive_percentage for s in sessions])),
        average_focus_switches=round_half_up(mean([s.metrics.focus_switches for s in sessions]), 1),
        trend_direction=trend,
    )


def find_best_performing_patterns(sessions: Sequence[SessionSummary]) -> PatternSummary | None:
    """What 4-5 star sessions have in common."""
    rated = rated_sessions(sessions)
    if len(rated) < MIN_RATED_FOR_PATTERNS:
        return None
    best = [s for s in rated if s.stars >= HIGH_RATING]
    if not best:
        return None

    summary = _summarize_subset(best)
    hours = Counter(h for h in (local_hour(s.start_time) for s in best) if h is not None)
    summary.best_hours = [
        HourCount(hour=h, count=c)
        for h, c in sorted(hours.items(), key=lambda item: (-item[1], item[0]))[:3]
    ]
    return summary


def identify_weak_patterns(sessions: Sequence[SessionSummary]) -> PatternSummary | None:
    """What 1-2 star sessions have in common."""
    rated = rated_sessions(sessions)
    if len(rated) < MIN_RATED_FOR_PATTERNS:
        return None
    weak = [s for s in rated if s.stars <= LOW_RATING]
    if not weak:
        return None
    return _summarize_subset(weak)


def analyze_rating_correlations(sessions: Sequence[SessionSummary]) -> RatingCorrelations | None:
    rated = rated_sessions(sessions)
    if len(rated) < MIN_RATED_FOR_CORRELATIONS:
        return None
    high = [s for s in rated if s.stars >= HIGH_RATING]
    low = [s for s in rated if s.stars <= LOW_RATING]
    if not high or not low:
        return None

    high_switches = mean([s.metrics.focus_switches for s in high])
    low_switches = mean([s.metrics.focus_switches for s in low])
    high_productive = mean([s.metrics.productive_percentage for s in high])
    low_productive = mean([s.metrics.productive_percentage for s in low])
    high_distracting = mean([s.metrics.distracting_percentage for s in high])
    low_distracting = mean([s.metrics.distracting_percentage for s in low])

    return RatingCorrelations(
        focus_switches=MetricGap(
            high_rated=round_half_up(high_switches, 1),
            low_rated=round_half_up(low_switches, 1),
            difference=round_half_up(low_switches - high_switches, 1),
        ),
        productivity=MetricGap(
            high_rated=round_half_up(high_productive),
            low_rated=round_half_up(low_productive),
            difference=round_half_up(high_productive - low_productive),
        ),
        distracting=MetricGap(
            high_rated=round_half_up(high_distracting),
            low_rated=round_half_up(low_distracting),
            difference=round_half_up(low_distracting - high_distracting),
        ),
    )


def time_period_for_hour(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 24:
        return "evening"
    return "night"


def analyze_time_patterns(sessions: Sequence[SessionSummary]) -> dict[str, TimePeriodStats] | None:
    """Average rating and productivity per time of day, by local start hour."""
    if not sessions:
        return None
    rated = rated_sessions(sessions)
    if not rated:
        return None

    buckets: dict[str, list[SessionSummary]] = {period: [] for period in TIME_RANGES}
    for session in rated:
        hour = local_hour(session.start_time)
        if hour is None:
            logger.debug("Skipping session %s with unparseable start time", session.session_id)
            continue
        buckets[time_period_for_hour(hour)].append(session)

    return {
        period: TimePeriodStats(
            count=len(items),
            average_rating=round_half_up(mean([s.stars for s in items]), 1),
            average_productivity=round_half_up(mean([s.metrics.productive_percentage for s in items])),
        )
        for period, items in buckets.items()
        if items
    }


def get_best_time_of_day(sessions: Sequence[SessionSummary]) -> TimeOfDay | None:
    return _extreme_time_of_day(sessions, best=True)


def get_worst_time_of_day(sessions: Sequence[SessionSummary]) -> TimeOfDay | None:
    return _extreme_time_of_day(sessions, best=False)


def get_productivity_by_hour(sessions: Sequence[SessionSummary]) -> list[HourlyProductivity]:
    rated = rated_sessions(sessions)
    by_hour: dict[int, list[SessionSummary]] = {}
    for session in rated:
        hour = local_hour(session.start_time)
        if hour is not None:
            by_hour.setdefault(hour, []).append(session)

    return [
        HourlyProductivity(
            hour=hour,
            hour_label=format_hour(hour),
            session_count=len(items),
            average_rating=round_half_up(mean([s.stars for s in items]), 1),
            average_productivity=round_half_up(mean([s.metrics.productive_percentage for s in items])),
        )
        for hour, items in sorted(by_hour.items())
    ]


def compare_to_history(
    current: SessionSummary,
    historical: Sequence[SessionSummary],
) -> HistoryComparison | None:
    """Compare one session with historical averages.

    Fewer focus switches count as better; duration has no better/worse.
    """
    if not historical:
        return None
    trends = analyze_session_trends(historical)
    if trends is None:
        return None

    minutes = current.duration.minutes
    productive = current.metrics.productive_percentage
    switches = current.metrics.focus_switches

    return HistoryComparison(
        duration=MetricComparison(
            current=minutes,
            average=trends.average_duration,
            difference=minutes - trends.average_duration,
            status="longer" if minutes > trends.average_duration else "shorter",
        ),
        productivity=MetricComparison(
            current=productive,
            average=trends.average_productivity,
            difference=productive - trends.average_productivity,
            status="better" if productive > trends.average_productivity else "worse",
        ),
        focus_switches=MetricComparison(
            current=switches,
            average=trends.average_focus_switches,
            difference=round_half_up(switches - trends.average_focus_switches, 1),
            status="better" if switches < trends.average_focus_switches else "worse",
        ),
    )


def build_historical_context(sessions: Sequence[SessionSummary], recent_limit: int = 5) -> HistoricalContext:
    return HistoricalContext(
        recent_sessions=recent_rated_sessions(sessions, recent_limit),
        trends=analyze_session_trends(sessions),
        best_time=get_best_time_of_day(sessions),
        worst_time=get_worst_time_of_day(sessions),
        correlations=analyze_rating_correlations(sessions),
    )


def format_hour(hour: int) -> str:
    if hour == 0:
        return "12am"
    if hour < 12:
        return f"{hour}am"
    if hour == 12:
        return "12pm"
    return f"{hour - 12}pm"


def _summarize_subset(subset: list[SessionSummary]) -> PatternSummary:
    return PatternSummary(
        session_count=len(subset),
        average_duration=round_half_up(mean([s.duration.minutes for s in subset])),
        average_productivity=round_half_up(mean([s.metrics.productive_percentage for s in subset])),
        average_focus_switches=round_half_up(mean([s.metrics.focus_switches for s in subset]), 1),
        average_distracting_percent=round_half_up(
            mean([s.metrics.distracting_percentage for s in subset])
        ),
        common_tags=_common_tags(subset),
    )


def _common_tags(subset: list[SessionSummary]) -> list[TagCount]:
    counts: Counter[str] = Counter()
    for session in subset:
        counts.update(session.user_rating.tags)
    threshold = max(COMMON_TAG_MIN_COUNT, len(subset) * COMMON_TAG_SHARE)
    common = [TagCount(tag=t, count=c) for t, c in counts.items() if c >= threshold]
    common.sort(key=lambda t: t.count, reverse=True)
    return common


def _extreme_time_of_day(sessions: Sequence[SessionSummary], best: bool) -> TimeOfDay | None:
    patterns = analyze_time_patterns(sessions)
    if not patterns:
        return None

    chosen: str | None = None
    for period, stats in patterns.items():
        if stats.count < MIN_SESSIONS_PER_PERIOD:
            continue
        if chosen is None:
            chosen = period
            continue
        current = patterns[chosen].average_rating
        if (best and stats.average_rating > current) or (not best and stats.average_rating < current):
            chosen = period

    if chosen is None:
        return None
    stats = patterns[chosen]
    return TimeOfDay(
        period=chosen,
        time_range=TIME_RANGES[chosen],
        average_rating=stats.average_rating,
        session_count=stats.count,
        average_productivity=stats.average_productivity,
    )
