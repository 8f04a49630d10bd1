"""Aggregate a session's visits into counts, percentages and top domains."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from focus_insights.classifier.categorizer import categorize_visit
from focus_insights.classifier.models import CategorizedVisit, Category, Visit
from focus_insights.focus.models import FocusAnalysisReport
from focus_insights.session.models import (
    DomainCount,
    SessionDuration,
    SessionMetrics,
    SessionSummary,
    VisitedDomain,
)
from focus_insights.utils import parse_timestamp, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_TOP_DOMAINS = 10


class SessionFocusAnalyzer(Protocol):
    def analyze(
        self,
        visits: Sequence[CategorizedVisit],
        total_session_minutes: float,
    ) -> FocusAnalysisReport | None: ...


@dataclass
class UrlAnalysis:
    """Visits grouped by category plus per-domain counts."""

    categorized: dict[Category, list[CategorizedVisit]]
    domain_counts: dict[str, int]
    totals: dict[str, int] = field(default_factory=dict)


def analyze_urls(visits: Sequence[Visit]) -> UrlAnalysis:
    categorized: dict[Category, list[CategorizedVisit]] = {c: [] for c in Category}
    domain_counts: dict[str, int] = {}

    for visit in visits:
        item = categorize_visit(visit)
        categorized[item.category].append(item)
        domain_counts[item.domain] = domain_counts.get(item.domain, 0) + 1

    totals = {c.value: len(items) for c, items in categorized.items()}
    totals["total"] = len(visits)
    return UrlAnalysis(categorized=categorized, domain_counts=domain_counts, totals=totals)


def calculate_focus_switches(visits: Sequence[Visit]) -> int:
    """Count productive<->distracting transitions between adjacent visits.

    Any transition into or out of neutral is ignored.
    """
    switches = 0
    previous: Category | None = None
    for visit in visits:
        current = categorize_visit(visit).category
        if (
            previous is not None
            and previous != Category.NEUTRAL
            and current != Category.NEUTRAL
            and previous != current
        ):
            switches += 1
        previous = current
    return switches


def get_top_domains(domain_counts: dict[str, int], limit: int = DEFAULT_TOP_DOMAINS) -> list[DomainCount]:
    """Domains by visit count, descending; ties keep first-seen order."""
    ranked = sorted(domain_counts.items(), key=lambda item: item[1], reverse=True)
    return [DomainCount(domain=d, count=c) for d, c in ranked[:max(0, limit)]]


def build_session_summary(
    session_id: str,
    start_time: str,
    end_time: str,
    visits: Sequence[Visit],
    focus_analyzer: SessionFocusAnalyzer | None = None,
) -> SessionSummary:
    """Build the persisted summary for a finished session (without an insight)."""
    duration = SessionDuration.from_seconds(_elapsed_seconds(start_time, end_time))
    analysis = analyze_urls(visits)
    total = analysis.totals["total"]
    productive = analysis.totals[Category.PRODUCTIVE.value]
    distracting = analysis.totals[Category.DISTRACTING.value]

    metrics = SessionMetrics(
        total_visits=total,
        productive_visits=productive,
        distracting_visits=distracting,
        neutral_visits=analysis.totals[Category.NEUTRAL.value],
        productive_percentage=round_half_up(productive / total * 100) if total else 0,
        distracting_percentage=round_half_up(distracting / total * 100) if total else 0,
        focus_switches=calculate_focus_switches(visits),
    )

    ordered = [categorize_visit(v) for v in visits]
    focus_report = None
    if focus_analyzer is not None:
        focus_report = focus_analyzer.analyze(ordered, duration.minutes)

    return SessionSummary(
        session_id=session_id,
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        metrics=metrics,
        top_domains=get_top_domains(analysis.domain_counts),
        visited_domains=[
            VisitedDomain(domain=v.domain, category=v.category, timestamp=v.timestamp)
            for v in ordered
        ],
        focus_analysis=focus_report,
    )


def _elapsed_seconds(start_time: str, end_time: str) -> int:
    start = parse_timestamp(start_time)
    end = parse_timestamp(end_time)
    if start is None or end is None:
        logger.warning("Unparseable session bounds %r - %r; duration set to 0", start_time, end_time)
        return 0
    return max(0, int((end - start).total_seconds()))
