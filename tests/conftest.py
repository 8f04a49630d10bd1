"""Shared factories for session fixtures."""

import pytest

from focus_insights.classifier.models import Category
from focus_insights.session.models import (
    DomainCount,
    SessionDuration,
    SessionMetrics,
    SessionSummary,
    UserRating,
    VisitedDomain,
)


def build_summary(
    session_id="session_1",
    start_time="2024-01-15T09:00:00",
    minutes=30,
    stars=None,
    skipped=False,
    tags=(),
    total_visits=10,
    productive_visits=5,
    distracting_visits=2,
    productive_percentage=None,
    distracting_percentage=None,
    focus_switches=2,
    domains=(),
    top_domains=(),
):
    neutral = total_visits - productive_visits - distracting_visits
    if productive_percentage is None:
        productive_percentage = round(productive_visits / total_visits * 100) if total_visits else 0
    if distracting_percentage is None:
        distracting_percentage = round(distracting_visits / total_visits * 100) if total_visits else 0
    rating = None
    if skipped:
        rating = UserRating.skip()
    elif stars is not None:
        rating = UserRating(stars=stars, tags=list(tags), rated_at="2024-01-15T10:00:00.000Z")
    return SessionSummary(
        session_id=session_id,
        start_time=start_time,
        end_time=start_time,
        duration=SessionDuration.from_seconds(minutes * 60),
        metrics=SessionMetrics(
            total_visits=total_visits,
            productive_visits=productive_visits,
            distracting_visits=distracting_visits,
            neutral_visits=neutral,
            productive_percentage=productive_percentage,
            distracting_percentage=distracting_percentage,
            focus_switches=focus_switches,
        ),
        top_domains=[DomainCount(domain=d, count=c) for d, c in top_domains],
        visited_domains=[
            VisitedDomain(domain=d, category=Category(c), timestamp=start_time) for d, c in domains
        ],
        user_rating=rating,
    )


@pytest.fixture
def make_summary():
    return build_summary
