"""Data models for the focus pattern analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RecoveryInstance:
    """A distraction followed by a return to productive work."""

    distraction_url: str
    distraction_domain: str
    recovery_minutes: float
    return_url: str
    return_domain: str

    def to_dict(self) -> dict:
        return {
            "distractionUrl": self.distraction_url,
            "distractionDomain": self.distraction_domain,
            "recoveryMinutes": self.recovery_minutes,
            "returnUrl": self.return_url,
            "returnDomain": self.return_domain,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RecoveryInstance:
        return cls(
            distraction_url=data.get("distractionUrl", ""),
            distraction_domain=data.get("distractionDomain", ""),
            recovery_minutes=data.get("recoveryMinutes", 0.0),
            return_url=data.get("returnUrl", ""),
            return_domain=data.get("returnDomain", ""),
        )


@dataclass
class FocusRecovery:
    average_recovery_minutes: float
    max_recovery_minutes: float
    min_recovery_minutes: float
    recovery_count: int
    total_time_lost: float
    recovery_instances: list[RecoveryInstance] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "averageRecoveryMinutes": self.average_recovery_minutes,
            "maxRecoveryMinutes": self.max_recovery_minutes,
            "minRecoveryMinutes": self.min_recovery_minutes,
            "recoveryCount": self.recovery_count,
            "recoveryInstances": [r.to_dict() for r in self.recovery_instances],
            "totalTimeLost": self.total_time_lost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FocusRecovery:
        return cls(
            average_recovery_minutes=data.get("averageRecoveryMinutes", 0.0),
            max_recovery_minutes=data.get("maxRecoveryMinutes", 0.0),
            min_recovery_minutes=data.get("minRecoveryMinutes", 0.0),
            recovery_count=data.get("recoveryCount", 0),
            total_time_lost=data.get("totalTimeLost", 0.0),
            recovery_instances=[
                RecoveryInstance.from_dict(r) for r in data.get("recoveryInstances") or []
            ],
        )


@dataclass
class DeepFocusPeriod:
    """A contiguous run of productive visits spanning at least five minutes."""

    start_time: str
    end_time: str
    duration_minutes: float
    url_count: int
    domains: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "durationMinutes": self.duration_minutes,
            "urlCount": self.url_count,
            "domains": list(self.domains),
        }

    @classmethod
    def from_dict(cls, data: dict) -> DeepFocusPeriod:
        return cls(
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
            duration_minutes=data.get("durationMinutes", 0.0),
            url_count=data.get("urlCount", 0),
            domains=list(data.get("domains") or []),
        )


@dataclass
class DeepFocus:
    period_count: int
    total_deep_focus_minutes: float
    average_period_minutes: float
    longest_period_minutes: float
    periods: list[DeepFocusPeriod] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "periodCount": self.period_count,
            "totalDeepFocusMinutes": self.total_deep_focus_minutes,
            "averagePeriodMinutes": self.average_period_minutes,
            "longestPeriodMinutes": self.longest_period_minutes,
            "periods": [p.to_dict() for p in self.periods],
        }

    @classmethod
    def from_dict(cls, data: dict) -> DeepFocus:
        return cls(
            period_count=data.get("periodCount", 0),
            total_deep_focus_minutes=data.get("totalDeepFocusMinutes", 0.0),
            average_period_minutes=data.get("averagePeriodMinutes", 0.0),
            longest_period_minutes=data.get("longestPeriodMinutes", 0.0),
            periods=[DeepFocusPeriod.from_dict(p) for p in data.get("periods") or []],
        )


@dataclass
class DistractionImpact:
    total_distraction_minutes: float
    distraction_percentage: int
    productive_minutes: float
    distraction_session_count: int
    average_distraction_length: float

    def to_dict(self) -> dict:
        return {
            "totalDistractionMinutes": self.total_distraction_minutes,
            "distractionPercentage": self.distraction_percentage,
            "productiveMinutes": self.productive_minutes,
            "distractionSessionCount": self.distraction_session_count,
            "averageDistractionLength": self.average_distraction_length,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DistractionImpact:
        return cls(
            total_distraction_minutes=data.get("totalDistractionMinutes", 0.0),
            distraction_percentage=data.get("distractionPercentage", 0),
            productive_minutes=data.get("productiveMinutes", 0.0),
            distraction_session_count=data.get("distractionSessionCount", 0),
            average_distraction_length=data.get("averageDistractionLength", 0.0),
        )


@dataclass
class FocusAnalysisReport:
    """Combined focus analysis attached to a finished session."""

    total_context_switches: int
    focus_recovery: FocusRecovery | None = None
    deep_focus: DeepFocus | None = None
    distraction_impact: DistractionImpact | None = None

    @property
    def has_significant_data(self) -> bool:
        return self.focus_recovery is not None or self.deep_focus is not None

    def to_dict(self) -> dict:
        return {
            "totalContextSwitches": self.total_context_switches,
            "focusRecovery": self.focus_recovery.to_dict() if self.focus_recovery else None,
            "deepFocus": self.deep_focus.to_dict() if self.deep_focus else None,
            "distractionImpact": (
                self.distraction_impact.to_dict() if self.distraction_impact else None
            ),
            "hasSignificantData": self.has_significant_data,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FocusAnalysisReport:
        recovery = data.get("focusRecovery")
        deep = data.get("deepFocus")
        impact = data.get("distractionImpact")
        return cls(
            total_context_switches=data.get("totalContextSwitches", 0),
            focus_recovery=FocusRecovery.from_dict(recovery) if recovery else None,
            deep_focus=DeepFocus.from_dict(deep) if deep else None,
            distraction_impact=DistractionImpact.from_dict(impact) if impact else None,
        )


@dataclass
class FocusInsight:
    """A short, typed remark derived from a focus report."""

    type: str  # "success" | "info" | "warning"
    text: str
