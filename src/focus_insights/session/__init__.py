"""Session lifecycle, metrics aggregation and the persisted session record."""

from focus_insights.session.lifecycle import FocusSession, SessionState, generate_session_id
from focus_insights.session.metrics import (
    UrlAnalysis,
    analyze_urls,
    build_session_summary,
    calculate_focus_switches,
    get_top_domains,
)
from focus_insights.session.models import (
    CompletedSession,
    DomainCount,
    SessionDuration,
    SessionMetrics,
    SessionSummary,
    UserRating,
    VisitedDomain,
    format_duration,
)

__all__ = [
    "FocusSession",
    "SessionState",
    "generate_session_id",
    "UrlAnalysis",
    "analyze_urls",
    "build_session_summary",
    "calculate_focus_switches",
    "get_top_domains",
    "CompletedSession",
    "DomainCount",
    "SessionDuration",
    "SessionMetrics",
    "SessionSummary",
    "UserRating",
    "VisitedDomain",
    "format_duration",
]
