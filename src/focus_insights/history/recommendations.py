"""Rule-based recommendations derived from rated session history."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from focus_insights.history.models import Recommendation
from focus_insights.history.patterns import (
    analyze_rating_correlations,
    analyze_session_trends,
    find_best_performing_patterns,
)
from focus_insights.session.models import SessionSummary

logger = logging.getLogger(__name__)


class RecommendationPolicy:
    """Thresholds for the recommendation rules. Override on a subclass or instance."""

    min_best_sessions = 3
    best_focus_switches_below = 5
    focus_switch_gap_above = 3
    distracting_gap_above = 15
    overall_focus_switches_above = 10


def generate_personalized_recommendations(
    sessions: Sequence[SessionSummary],
    policy: RecommendationPolicy | None = None,
) -> list[Recommendation]:
    policy = policy or RecommendationPolicy()
    recommendations: list[Recommendation] = []

    trends = analyze_session_trends(sessions)
    if trends is None:
        return recommendations
    best = find_best_performing_patterns(sessions)
    correlations = analyze_rating_correlations(sessions)

    if trends.trend_direction == "improving":
        recommendations.append(Recommendation(
            type="success",
            title="You're On Fire!",
            message=(
                "Your sessions are improving! Keep doing what you're doing. "
                f"Your average rating has increased to {trends.average_rating} stars."
            ),
        ))
    elif trends.trend_direction == "declining":
        recommendations.append(Recommendation(
            type="warning",
            title="Time to Adjust",
            message=(
                "Your recent sessions show a declining trend. "
                "Let's identify what changed and get you back on track."
            ),
        ))

    if best is not None and best.session_count >= policy.min_best_sessions:
        if best.average_duration > 0:
            recommendations.append(Recommendation(
                type="info",
                title="Your Sweet Spot",
                message=(
                    f"Your best sessions average {best.average_duration} minutes. "
                    "Try to aim for similar session lengths."
                ),
            ))
        if best.average_focus_switches < policy.best_focus_switches_below:
            recommendations.append(Recommendation(
                type="success",
                title="Focus Strategy",
                message=(
                    f"In your top sessions, you averaged {best.average_focus_switches} focus switches. "
                    "Minimize distractions to stay in this zone."
                ),
            ))

    if correlations is not None:
        if correlations.focus_switches.difference > policy.focus_switch_gap_above:
            recommendations.append(Recommendation(
                type="warning",
                title="Focus Switches Matter",
                message=(
                    f"Low-rated sessions had {correlations.focus_switches.difference} more focus "
                    "switches on average. Try to reduce context switching."
                ),
            ))
        if correlations.distracting.difference > policy.distracting_gap_above:
            recommendations.append(Recommendation(
                type="warning",
                title="Distractions Impact",
                message=(
                    f"Your lower-rated sessions had {correlations.distracting.difference}% more "
                    "distracting content. Consider blocking these sites during study time."
                ),
            ))

    if trends.average_focus_switches > policy.overall_focus_switches_above:
        recommendations.append(Recommendation(
            type="info",
            title="Too Much Switching",
            message=(
                f"You average {trends.average_focus_switches} focus switches per session. "
                "Try staying on one task longer before switching."
            ),
        ))

    logger.debug("Generated %d recommendations from %d sessions", len(recommendations), len(sessions))
    return recommendations
