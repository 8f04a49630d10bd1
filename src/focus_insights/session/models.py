"""Data models for finished focus sessions.

Stored records use camelCase keys so the archive can be read by UI code
unchanged; the dataclasses themselves are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from focus_insights.classifier.models import Category, Visit
from focus_insights.focus.models import FocusAnalysisReport
from focus_insights.utils import to_iso


@dataclass(frozen=True)
class CompletedSession:
    """The visit buffer handed over when a session stops."""

    session_id: str
    start_time: str
    end_time: str
    visits: tuple[Visit, ...]


@dataclass
class SessionDuration:
    seconds: int
    minutes: int
    formatted: str

    @classmethod
    def from_seconds(cls, seconds: int) -> SessionDuration:
        seconds = max(0, int(seconds))
        return cls(seconds=seconds, minutes=seconds // 60, formatted=format_duration(seconds))

    def to_dict(self) -> dict:
        return {"seconds": self.seconds, "minutes": self.minutes, "formatted": self.formatted}

    @classmethod
    def from_dict(cls, data: dict) -> SessionDuration:
        seconds = int(data.get("seconds") or 0)
        return cls(
            seconds=seconds,
            minutes=int(data.get("minutes") or 0),
            formatted=data.get("formatted") or format_duration(seconds),
        )


@dataclass
class SessionMetrics:
    total_visits: int
    productive_visits: int
    distracting_visits: int
    neutral_visits: int
    productive_percentage: int
    distracting_percentage: int
    focus_switches: int

    @property
    def neutral_percentage(self) -> int:
        return 100 - self.productive_percentage - self.distracting_percentage

    def to_dict(self) -> dict:
        return {
            "totalVisits": self.total_visits,
            "productiveVisits": self.productive_visits,
            "distractingVisits": self.distracting_visits,
            "neutralVisits": self.neutral_visits,
            "productivePercentage": self.productive_percentage,
            "distractingPercentage": self.distracting_percentage,
            "focusSwitches": self.focus_switches,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SessionMetrics:
        return cls(
            total_visits=data.get("totalVisits", 0),
            productive_visits=data.get("productiveVisits", 0),
            distracting_visits=data.get("distractingVisits", 0),
            neutral_visits=data.get("neutralVisits", 0),
            productive_percentage=data.get("productivePercentage", 0),
            distracting_percentage=data.get("distractingPercentage", 0),
            focus_switches=data.get("focusSwitches", 0),
        )


@dataclass
class DomainCount:
    domain: str
    count: int

    def to_dict(self) -> dict:
        return {"domain": self.domain, "count": self.count}


@dataclass
class VisitedDomain:
    """Anonymized visit: no URL or title is kept."""

    domain: str
    category: Category
    timestamp: str

    def to_dict(self) -> dict:
        return {"domain": self.domain, "category": self.category.value, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict) -> VisitedDomain:
        try:
            category = Category(data.get("category", "neutral"))
        except ValueError:
            category = Category.NEUTRAL
        return cls(
            domain=data.get("domain", ""),
            category=category,
            timestamp=data.get("timestamp", ""),
        )


@dataclass
class UserRating:
    """Post-session self assessment. ``stars`` is None when the rating was skipped."""

    stars: int | None
    tags: list[str] = field(default_factory=list)
    notes: str = ""
    rated_at: str = ""
    skipped: bool = False

    def __post_init__(self):
        if self.stars is not None and not 1 <= self.stars <= 5:
            raise ValueError(f"stars must be between 1 and 5, got {self.stars}")
        self.tags = list(dict.fromkeys(self.tags))
        if not self.rated_at:
            self.rated_at = to_iso(datetime.now(timezone.utc))

    @classmethod
    def skip(cls) -> UserRating:
        return cls(stars=None, skipped=True)

    @property
    def is_rated(self) -> bool:
        return self.stars is not None and not self.skipped

    def to_dict(self) -> dict:
        return {
            "stars": self.stars,
            "tags": list(self.tags),
            "notes": self.notes,
            "ratedAt": self.rated_at,
            "skipped": self.skipped,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserRating:
        stars = data.get("stars")
        return cls(
            # Stored "0" or out-of-range stars are treated as no rating.
            stars=stars if isinstance(stars, int) and 1 <= stars <= 5 else None,
            tags=list(data.get("tags") or []),
            notes=data.get("notes") or "",
            rated_at=data.get("ratedAt") or "",
            skipped=bool(data.get("skipped", False)),
        )


@dataclass
class SessionSummary:
    """The persisted record of one finished focus session."""

    session_id: str
    start_time: str
    end_time: str
    duration: SessionDuration
    metrics: SessionMetrics
    top_domains: list[DomainCount] = field(default_factory=list)
    visited_domains: list[VisitedDomain] = field(default_factory=list)
    focus_analysis: FocusAnalysisReport | None = None
    ai_insight: str | None = None
    is_ai_generated: bool = False
    user_rating: UserRating | None = None

    @property
    def is_rated(self) -> bool:
        return self.user_rating is not None and self.user_rating.is_rated

    @property
    def stars(self) -> int | None:
        return self.user_rating.stars if self.is_rated else None

    def to_dict(self) -> dict:
        data = {
            "sessionId": self.session_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration.to_dict(),
            "metrics": self.metrics.to_dict(),
            "topDomains": [d.to_dict() for d in self.top_domains],
            "visitedDomains": [v.to_dict() for v in self.visited_domains],
            "focusAnalysis": self.focus_analysis.to_dict() if self.focus_analysis else None,
            "aiInsight": self.ai_insight,
            "isAiGenerated": self.is_ai_generated,
        }
        if self.user_rating is not None:
            data["userRating"] = self.user_rating.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SessionSummary:
        focus = data.get("focusAnalysis")
        rating = data.get("userRating")
        return cls(
            session_id=data.get("sessionId", ""),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
            duration=SessionDuration.from_dict(data.get("duration") or {}),
            metrics=SessionMetrics.from_dict(data.get("metrics") or {}),
            top_domains=[
                DomainCount(domain=d.get("domain", ""), count=d.get("count", 0))
                for d in data.get("topDomains") or []
            ],
            visited_domains=[VisitedDomain.from_dict(v) for v in data.get("visitedDomains") or []],
            focus_analysis=FocusAnalysisReport.from_dict(focus) if focus else None,
            ai_insight=data.get("aiInsight"),
            is_ai_generated=bool(data.get("isAiGenerated", False)),
            user_rating=UserRating.from_dict(rating) if rating else None,
        )


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
