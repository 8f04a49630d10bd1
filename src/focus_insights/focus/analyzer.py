"""Detect focus recovery, deep focus and distraction impact in a visit sequence.

All functions take visits in chronological order with categories already
attached. Insufficient data yields ``None``; individual instances whose
timing is anomalous (unparseable timestamps, negative spans, gaps of an hour
or more) are dropped rather than failing the whole analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from focus_insights.classifier.models import CategorizedVisit, Category
from focus_insights.focus.models import (
    DeepFocus,
    DeepFocusPeriod,
    DistractionImpact,
    FocusAnalysisReport,
    FocusRecovery,
    RecoveryInstance,
)
from focus_insights.utils import minutes_between, parse_timestamp, round_half_up, to_iso

logger = logging.getLogger(__name__)

# Spans at or beyond this are treated as session gaps or clock anomalies.
MAX_PLAUSIBLE_MINUTES = 60
DEEP_FOCUS_MIN_MINUTES = 5
MIN_VISITS_FOR_RECOVERY = 3


def calculate_focus_recovery(visits: Sequence[CategorizedVisit]) -> FocusRecovery | None:
    """Measure how long it takes to get back to productive work after a distraction.

    Only the most recent distracting visit before a productive one counts;
    the marker is cleared once a productive visit is seen.
    """
    if not visits or len(visits) < MIN_VISITS_FOR_RECOVERY:
        return None

    instances: list[RecoveryInstance] = []
    last_distraction: CategorizedVisit | None = None

    for visit in visits:
        if visit.category == Category.DISTRACTING:
            last_distraction = visit
        elif visit.category == Category.PRODUCTIVE and last_distraction is not None:
            minutes = minutes_between(last_distraction.timestamp, visit.timestamp)
            if _is_plausible(minutes):
                instances.append(RecoveryInstance(
                    distraction_url=last_distraction.url,
                    distraction_domain=last_distraction.domain,
                    recovery_minutes=round_half_up(minutes, 1),
                    return_url=visit.url,
                    return_domain=visit.domain,
                ))
            else:
                logger.debug("Skipping implausible recovery span: %s min", minutes)
            last_distraction = None

    if not instances:
        return None

    minutes_list = [r.recovery_minutes for r in instances]
    total = sum(minutes_list)
    return FocusRecovery(
        average_recovery_minutes=round_half_up(total / len(instances), 1),
        max_recovery_minutes=round_half_up(max(minutes_list), 1),
        min_recovery_minutes=round_half_up(min(minutes_list), 1),
        recovery_count=len(instances),
        total_time_lost=round_half_up(total, 1),
        recovery_instances=instances,
    )


def detect_deep_focus_periods(visits: Sequence[CategorizedVisit]) -> DeepFocus | None:
    """Find maximal productive runs whose first-to-last span is at least five minutes."""
    if not visits or len(visits) < 2:
        return None

    periods: list[DeepFocusPeriod] = []
    for run in _runs_of(visits, Category.PRODUCTIVE):
        period = _deep_focus_period(run)
        if period is not None:
            periods.append(period)

    if not periods:
        return None

    durations = [p.duration_minutes for p in periods]
    total = sum(durations)
    return DeepFocus(
        period_count=len(periods),
        total_deep_focus_minutes=round_half_up(total, 1),
        average_period_minutes=round_half_up(total / len(periods), 1),
        longest_period_minutes=round_half_up(max(durations), 1),
        periods=periods,
    )


def measure_distraction_impact(
    visits: Sequence[CategorizedVisit],
    total_session_minutes: float,
) -> DistractionImpact | None:
    """Estimate time spent on distracting runs and its share of the session.

    A run ends at the timestamp of the visit that follows it; a run that
    reaches the end of the session ends at the last visit's own timestamp.
    """
    if not visits or not total_session_minutes:
        return None

    run_minutes: list[float] = []
    index = 0
    while index < len(visits):
        if visits[index].category != Category.DISTRACTING:
            index += 1
            continue
        start = index
        while index < len(visits) and visits[index].category == Category.DISTRACTING:
            index += 1
        end_visit = visits[index] if index < len(visits) else visits[-1]
        minutes = minutes_between(visits[start].timestamp, end_visit.timestamp)
        if _is_plausible(minutes):
            run_minutes.append(minutes)

    distracting_minutes = sum(run_minutes)
    return DistractionImpact(
        total_distraction_minutes=round_half_up(distracting_minutes, 1),
        distraction_percentage=round_half_up(distracting_minutes / total_session_minutes * 100),
        productive_minutes=round_half_up(total_session_minutes - distracting_minutes, 1),
        distraction_session_count=len(run_minutes),
        average_distraction_length=(
            round_half_up(distracting_minutes / len(run_minutes), 1) if run_minutes else 0
        ),
    )


def count_context_switches(visits: Sequence[CategorizedVisit]) -> int:
    """Count every category change between adjacent visits, neutral included."""
    return sum(
        1 for previous, current in zip(visits, visits[1:])
        if previous.category != current.category
    )


def generate_context_switch_report(
    visits: Sequence[CategorizedVisit],
    total_session_minutes: float,
) -> FocusAnalysisReport | None:
    """Run every focus analysis over one session."""
    if not visits:
        return None

    return FocusAnalysisReport(
        total_context_switches=count_context_switches(visits),
        focus_recovery=calculate_focus_recovery(visits),
        deep_focus=detect_deep_focus_periods(visits),
        distraction_impact=measure_distraction_impact(visits, total_session_minutes),
    )


class FocusAnalyzer:
    """Injectable wrapper around :func:`generate_context_switch_report`."""

    def analyze(
        self,
        visits: Sequence[CategorizedVisit],
        total_session_minutes: float,
    ) -> FocusAnalysisReport | None:
        return generate_context_switch_report(visits, total_session_minutes)


def _runs_of(visits: Sequence[CategorizedVisit], category: Category) -> list[list[CategorizedVisit]]:
    runs: list[list[CategorizedVisit]] = []
    current: list[CategorizedVisit] = []
    for visit in visits:
        if visit.category == category:
            current.append(visit)
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def _deep_focus_period(run: list[CategorizedVisit]) -> DeepFocusPeriod | None:
    start = parse_timestamp(run[0].timestamp)
    end = parse_timestamp(run[-1].timestamp)
    if start is None or end is None:
        return None
    minutes = (end - start).total_seconds() / 60
    if minutes < DEEP_FOCUS_MIN_MINUTES:
        return None
    return DeepFocusPeriod(
        start_time=to_iso(start),
        end_time=to_iso(end),
        duration_minutes=round_half_up(minutes, 1),
        url_count=len(run),
        domains=list(dict.fromkeys(v.domain for v in run)),
    )


def _is_plausible(minutes: float | None) -> bool:
    return minutes is not None and 0 < minutes < MAX_PLAUSIBLE_MINUTES
