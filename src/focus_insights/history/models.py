"""Data models for historical pattern analysis.

These are computed on demand from the archive and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SessionTrends:
    total_sessions: int
    rated_sessions: int
    average_rating: float
    average_duration: int
    average_productivity: int
    average_focus_switches: float
    trend_direction: str  # "improving" | "declining" | "stable"


@dataclass
class TagCount:
    tag: str
    count: int


@dataclass
class HourCount:
    hour: int
    count: int


@dataclass
class PatternSummary:
    """Averages over a subset of rated sessions (best or weak)."""

    session_count: int
    average_duration: int
    average_productivity: int
    average_focus_switches: float
    average_distracting_percent: int
    common_tags: list[TagCount] = field(default_factory=list)
    best_hours: list[HourCount] = field(default_factory=list)


@dataclass
class MetricGap:
    high_rated: float
    low_rated: float
    difference: float


@dataclass
class RatingCorrelations:
    """Gaps between 4-5 star and 1-2 star sessions.

    Each ``difference`` is positive when the low-rated sessions were worse.
    """

    focus_switches: MetricGap
    productivity: MetricGap
    distracting: MetricGap


@dataclass
class TimePeriodStats:
    count: int
    average_rating: float
    average_productivity: int


@dataclass
class TimeOfDay:
    period: str
    time_range: str
    average_rating: float
    session_count: int
    average_productivity: int


@dataclass
class HourlyProductivity:
    hour: int
    hour_label: str
    session_count: int
    average_rating: float
    average_productivity: int


@dataclass
class MetricComparison:
    current: float
    average: float
    difference: float
    status: str  # "better"/"worse" or "longer"/"shorter"


@dataclass
class HistoryComparison:
    duration: MetricComparison
    productivity: MetricComparison
    focus_switches: MetricComparison


@dataclass
class HistoricalContext:
    """Everything the dispatcher and prompt builder want to know about the past."""

    recent_sessions: list = field(default_factory=list)
    trends: SessionTrends | None = None
    best_time: TimeOfDay | None = None
    worst_time: TimeOfDay | None = None
    correlations: RatingCorrelations | None = None

    @property
    def session_count(self) -> int:
        return len(self.recent_sessions)


@dataclass
class Recommendation:
    type: str  # "success" | "info" | "warning"
    title: str
    message: str


@dataclass
class DomainImpact:
    domain: str
    frequency: int
    avg_rating_when_used: float
    avg_productivity_when_used: int
    impact: str  # "positive" | "negative" | "neutral"
    category: str
    ratings: list[int] = field(default_factory=list)
    variance: float = 0.0
    std_dev: float = 0.0
    is_significant: bool = False


@dataclass
class ActivityImpact:
    total_sessions: int
    total_domains: int
    domains: list[DomainImpact] = field(default_factory=list)


@dataclass
class ActivitySummary:
    """Domains that consistently help or hurt session ratings."""

    count: int
    average_rating: float
    average_productivity: int
    activities: list[DomainImpact] = field(default_factory=list)
    recommendation: str = ""


@dataclass
class ActivitySignificance:
    """How much one domain's average rating can be trusted.

    ``confidence``, ``difference`` and ``consistency`` stay ``None`` when the
    domain was used in too few sessions to judge.
    """

    is_significant: bool
    reason: str
    confidence: str | None = None  # "moderate" | "low"
    difference: float | None = None
    consistency: str | None = None  # "consistent" | "variable"


@dataclass
class ActivityTrend:
    domain: str
    old_rating: float
    new_rating: float
    change: float
    trend: str  # "improving" | "declining"
    old_impact: str
    new_impact: str


@dataclass
class ActivityTrends:
    changed_activities: int
    trends: list[ActivityTrend] = field(default_factory=list)


@dataclass
class ActionItem:
    type: str  # "success" | "warning"
    category: str  # "Leverage Strengths" | "Reduce Barriers"
    action: str
    reason: str
    priority: str  # "high" | "medium"


@dataclass
class ActionPlan:
    total_recommendations: int
    recommendations: list[ActionItem] = field(default_factory=list)
    summary: str = ""
