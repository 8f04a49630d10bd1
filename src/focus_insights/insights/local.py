"""Deterministic insight text that needs no external service."""

from __future__ import annotations

from focus_insights.session.models import SessionSummary

QUICK_SESSION_MINUTES = 5
EXCELLENT_PRODUCTIVITY = 80
LOW_ACTIVITY_VISITS = 5

QUICK_SESSION = (
    "Quick session! While brief, every focused moment counts. Consider extending your next "
    "session to 25-50 minutes for deeper work. Even short bursts of productivity add up over time."
)
EXCELLENT_FOCUS = (
    "Excellent focus session! You stayed on task and avoided distractions effectively. This is "
    "exactly the kind of disciplined browsing that leads to great work. Keep this momentum going!"
)
RESTRAINT = (
    "Focused session with minimal tab switching. You demonstrated great restraint and "
    "concentration. This kind of single-tasking is increasingly rare and valuable. Well done!"
)
EXPLORATORY = (
    "This session showed exploratory browsing. While not highly productive, exploration has its "
    "place in learning and discovery. For focused work sessions, try setting clearer goals beforehand."
)
GENERIC = (
    "You completed a session! Every tracked session helps build awareness of your browsing habits. "
    "Keep tracking to identify patterns and optimize your focus over time."
)

FALLBACK_STRONG = (
    "Great session! You maintained strong focus and made productive use of your time. Your browsing "
    "patterns show discipline and intentionality. Keep building on this momentum, and consider "
    "tracking what times of day you're most focused to optimize your future sessions."
)
FALLBACK_MIXED = (
    "You had some good focused moments in this session, though there's room to reduce distractions. "
    "Try setting specific time blocks for focused work and separate breaks for browsing. Small changes "
    "in your routine can lead to significant improvements in productivity over time."
)
FALLBACK_WEAK = (
    "This session showed some challenges with maintaining focus. That's okay, awareness is the first "
    "step to improvement. Consider using website blockers during work sessions or trying the Pomodoro "
    "technique to build better browsing habits. Remember, every session is a fresh opportunity to improve."
)


def generate_local_insight(summary: SessionSummary) -> str:
    """Pick the first matching template, checked in priority order."""
    metrics = summary.metrics
    if summary.duration.minutes < QUICK_SESSION_MINUTES:
        return QUICK_SESSION
    if metrics.productive_percentage >= EXCELLENT_PRODUCTIVITY:
        return EXCELLENT_FOCUS
    if metrics.total_visits < LOW_ACTIVITY_VISITS:
        return RESTRAINT
    if metrics.neutral_visits > metrics.productive_visits + metrics.distracting_visits:
        return EXPLORATORY
    return GENERIC


def generate_fallback_insight(summary: SessionSummary) -> str:
    """Text used when the external insight request fails."""
    productive = summary.metrics.productive_percentage
    if productive >= 60:
        return FALLBACK_STRONG
    if productive >= 40:
        return FALLBACK_MIXED
    return FALLBACK_WEAK
