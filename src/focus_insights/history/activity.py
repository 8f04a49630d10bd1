"""Which visited domains go along with high or low session ratings."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from focus_insights.history.models import (
    ActionItem,
    ActionPlan,
    ActivityImpact,
    ActivitySignificance,
    ActivitySummary,
    ActivityTrend,
    ActivityTrends,
    DomainImpact,
)
from focus_insights.history.patterns import rated_sessions
from focus_insights.session.models import SessionSummary
from focus_insights.utils import mean, round_half_up

logger = logging.getLogger(__name__)

MIN_RATED_SESSIONS = 5
MIN_FREQUENCY = 3
POSITIVE_RATING = 4.0
NEGATIVE_RATING = 2.5
MAX_CONSISTENT_STD_DEV = 1.5
MAX_ACTIVITIES = 10
MIN_MEANINGFUL_DIFFERENCE = 0.5
MIN_RATING_CHANGE = 0.5
MAX_TRENDS = 5


@dataclass
class _DomainTally:
    category: str
    ratings: list[int] = field(default_factory=list)
    productivity: list[int] = field(default_factory=list)


def analyze_activity_impact(sessions: Sequence[SessionSummary]) -> ActivityImpact | None:
    """Per-domain rating statistics over rated sessions, most used domains first.

    A domain counts once per session no matter how often it was visited.
    """
    rated = rated_sessions(sessions)
    if len(rated) < MIN_RATED_SESSIONS:
        return None

    tallies: dict[str, _DomainTally] = {}
    for session in rated:
        seen: set[str] = set()
        for visit in session.visited_domains:
            if visit.domain in seen:
                continue
            seen.add(visit.domain)
            tally = tallies.setdefault(visit.domain, _DomainTally(category=visit.category.value))
            tally.ratings.append(session.stars)
            tally.productivity.append(session.metrics.productive_percentage)

    domains = [_domain_impact(domain, tally) for domain, tally in tallies.items()]
    domains.sort(key=lambda d: d.frequency, reverse=True)
    return ActivityImpact(total_sessions=len(rated), total_domains=len(domains), domains=domains)


def identify_helpful_activities(sessions: Sequence[SessionSummary]) -> ActivitySummary | None:
    impact = analyze_activity_impact(sessions)
    if impact is None:
        return None
    helpful = [d for d in impact.domains if d.impact == "positive" and d.is_significant]
    if not helpful:
        return None
    helpful.sort(key=lambda d: d.avg_rating_when_used, reverse=True)
    top = helpful[0]
    return _summarize(
        helpful,
        f"Focus more on {top.domain}. Sessions with this site average "
        f"{top.avg_rating_when_used} stars and {top.avg_productivity_when_used}% productivity.",
    )


def identify_harmful_activities(sessions: Sequence[SessionSummary]) -> ActivitySummary | None:
    impact = analyze_activity_impact(sessions)
    if impact is None:
        return None
    harmful = [d for d in impact.domains if d.impact == "negative" and d.is_significant]
    if not harmful:
        return None
    harmful.sort(key=lambda d: d.avg_rating_when_used)
    worst = harmful[0]
    return _summarize(
        harmful,
        f"Limit {worst.domain}. Sessions with this site average only "
        f"{worst.avg_rating_when_used} stars and {worst.avg_productivity_when_used}% productivity.",
    )


def calculate_statistical_significance(
    activity: DomainImpact | None,
    overall_avg_rating: float,
) -> ActivitySignificance:
    """Judge whether a domain's rating really differs from the overall average.

    Needs at least three sessions, a standard deviation under 1.5 and a gap of
    half a star or more from ``overall_avg_rating``.
    """
    if activity is None or activity.frequency < MIN_FREQUENCY:
        return ActivitySignificance(
            is_significant=False,
            reason=f"Insufficient data (need {MIN_FREQUENCY}+ sessions)",
        )

    difference = abs(activity.avg_rating_when_used - overall_avg_rating)
    consistent = activity.std_dev < MAX_CONSISTENT_STD_DEV
    significant = consistent and difference >= MIN_MEANINGFUL_DIFFERENCE
    if significant:
        reason = f"{activity.frequency} sessions with consistent impact (std dev {activity.std_dev})"
    else:
        reason = "Not enough data or too variable"
    return ActivitySignificance(
        is_significant=significant,
        reason=reason,
        confidence="moderate" if consistent else "low",
        difference=round_half_up(difference, 1),
        consistency="consistent" if consistent else "variable",
    )


def compare_activity_trends(
    recent_sessions: Sequence[SessionSummary],
    older_sessions: Sequence[SessionSummary],
) -> ActivityTrends | None:
    """Domains whose average rating moved by half a star or more between two periods.

    Only domains used in both periods are compared; the five largest moves
    are kept.
    """
    recent = analyze_activity_impact(recent_sessions)
    older = analyze_activity_impact(older_sessions)
    if recent is None or older is None:
        return None

    older_by_domain = {d.domain: d for d in older.domains}
    trends = []
    for current in recent.domains:
        previous = older_by_domain.get(current.domain)
        if previous is None:
            continue
        change = current.avg_rating_when_used - previous.avg_rating_when_used
        if abs(change) < MIN_RATING_CHANGE:
            continue
        trends.append(
            ActivityTrend(
                domain=current.domain,
                old_rating=previous.avg_rating_when_used,
                new_rating=current.avg_rating_when_used,
                change=round_half_up(change, 1),
                trend="improving" if change > 0 else "declining",
                old_impact=previous.impact,
                new_impact=current.impact,
            )
        )

    trends.sort(key=lambda t: abs(t.change), reverse=True)
    logger.debug("%d domains changed rating between periods", len(trends))
    return ActivityTrends(changed_activities=len(trends), trends=trends[:MAX_TRENDS])


def generate_personalized_action_plan(sessions: Sequence[SessionSummary]) -> ActionPlan | None:
    """Prioritized steps built from the most helpful and most harmful domains."""
    helpful = identify_helpful_activities(sessions)
    harmful = identify_harmful_activities(sessions)
    if helpful is None and harmful is None:
        return None

    items: list[ActionItem] = []
    if helpful is not None and helpful.activities:
        top = helpful.activities[0]
        items.append(ActionItem(
            type="success",
            category="Leverage Strengths",
            action=f"Continue using {top.domain}",
            reason=(
                f"Sessions with this site average {top.avg_rating_when_used} stars "
                f"(used in {top.frequency} sessions)"
            ),
            priority="high",
        ))
        if len(helpful.activities) >= 2:
            second = helpful.activities[1]
            items.append(ActionItem(
                type="success",
                category="Leverage Strengths",
                action=f"Prioritize {second.domain}",
                reason=f"Consistent positive impact: {second.avg_rating_when_used} stars",
                priority="medium",
            ))

    if harmful is not None and harmful.activities:
        worst = harmful.activities[0]
        items.append(ActionItem(
            type="warning",
            category="Reduce Barriers",
            action=f"Limit time on {worst.domain}",
            reason=(
                f"Sessions with this site average {worst.avg_rating_when_used} stars "
                f"({worst.frequency} sessions affected)"
            ),
            priority="high",
        ))
        if len(harmful.activities) >= 2:
            second = harmful.activities[1]
            items.append(ActionItem(
                type="warning",
                category="Reduce Barriers",
                action=f"Consider blocking {second.domain} during study",
                reason=f"Consistent negative impact: {second.avg_rating_when_used} stars",
                priority="medium",
            ))

    return ActionPlan(
        total_recommendations=len(items),
        recommendations=items,
        summary=_action_plan_summary(helpful, harmful),
    )


def _domain_impact(domain: str, tally: _DomainTally) -> DomainImpact:
    frequency = len(tally.ratings)
    avg_rating = mean(tally.ratings)
    variance = mean([(r - avg_rating) ** 2 for r in tally.ratings])
    std_dev = math.sqrt(variance)

    impact = "neutral"
    if frequency >= MIN_FREQUENCY:
        if avg_rating >= POSITIVE_RATING:
            impact = "positive"
        elif avg_rating <= NEGATIVE_RATING:
            impact = "negative"

    return DomainImpact(
        domain=domain,
        frequency=frequency,
        avg_rating_when_used=round_half_up(avg_rating, 1),
        avg_productivity_when_used=round_half_up(mean(tally.productivity)),
        impact=impact,
        category=tally.category,
        ratings=list(tally.ratings),
        variance=round_half_up(variance, 2),
        std_dev=round_half_up(std_dev, 2),
        is_significant=frequency >= MIN_FREQUENCY and std_dev < MAX_CONSISTENT_STD_DEV,
    )


def _summarize(activities: list[DomainImpact], recommendation: str) -> ActivitySummary:
    return ActivitySummary(
        count=len(activities),
        average_rating=round_half_up(mean([d.avg_rating_when_used for d in activities]), 1),
        average_productivity=round_half_up(mean([d.avg_productivity_when_used for d in activities])),
        activities=activities[:MAX_ACTIVITIES],
        recommendation=recommendation,
    )


def _action_plan_summary(helpful: ActivitySummary | None, harmful: ActivitySummary | None) -> str:
    if helpful is not None and harmful is not None:
        return (
            f"You have {helpful.count} activities that boost performance and {harmful.count} that "
            "hinder it. Focus on your strengths while reducing time on problem sites."
        )
    if helpful is not None:
        return (
            f"You have {helpful.count} activities that consistently boost performance. "
            "Keep leveraging these strengths!"
        )
    if harmful is not None:
        return (
            f"You have {harmful.count} activities that consistently hurt performance. "
            "Consider limiting or blocking these during study time."
        )
    return ""
