"""Trends, correlations and recommendations over archived sessions."""

from focus_insights.history.activity import (
    analyze_activity_impact,
    calculate_statistical_significance,
    compare_activity_trends,
    generate_personalized_action_plan,
    identify_harmful_activities,
    identify_helpful_activities,
)
from focus_insights.history.models import (
    ActionItem,
    ActionPlan,
    ActivityImpact,
    ActivitySignificance,
    ActivitySummary,
    ActivityTrend,
    ActivityTrends,
    DomainImpact,
    HistoricalContext,
    HistoryComparison,
    HourlyProductivity,
    PatternSummary,
    RatingCorrelations,
    Recommendation,
    SessionTrends,
    TimeOfDay,
)
from focus_insights.history.patterns import (
    analyze_rating_correlations,
    analyze_session_trends,
    analyze_time_patterns,
    build_historical_context,
    compare_to_history,
    find_best_performing_patterns,
    get_best_time_of_day,
    get_productivity_by_hour,
    get_worst_time_of_day,
    identify_weak_patterns,
    recent_rated_sessions,
)
from focus_insights.history.recommendations import (
    RecommendationPolicy,
    generate_personalized_recommendations,
)

__all__ = [
    "analyze_activity_impact",
    "calculate_statistical_significance",
    "compare_activity_trends",
    "generate_personalized_action_plan",
    "identify_harmful_activities",
    "identify_helpful_activities",
    "ActionItem",
    "ActionPlan",
    "ActivityImpact",
    "ActivitySignificance",
    "ActivitySummary",
    "ActivityTrend",
    "ActivityTrends",
    "DomainImpact",
    "HistoricalContext",
    "HistoryComparison",
    "HourlyProductivity",
    "PatternSummary",
    "RatingCorrelations",
    "Recommendation",
    "SessionTrends",
    "TimeOfDay",
    "analyze_rating_correlations",
    "analyze_session_trends",
    "analyze_time_patterns",
    "build_historical_context",
    "compare_to_history",
    "find_best_performing_patterns",
    "get_best_time_of_day",
    "get_productivity_by_hour",
    "get_worst_time_of_day",
    "identify_weak_patterns",
    "recent_rated_sessions",
    "RecommendationPolicy",
    "generate_personalized_recommendations",
]
