"""Focus recovery, deep focus and distraction impact analysis."""

from focus_insights.focus.analyzer import (
    FocusAnalyzer,
    calculate_focus_recovery,
    count_context_switches,
    detect_deep_focus_periods,
    generate_context_switch_report,
    measure_distraction_impact,
)
from focus_insights.focus.insights import generate_focus_insights
from focus_insights.focus.models import (
    DeepFocus,
    DeepFocusPeriod,
    DistractionImpact,
    FocusAnalysisReport,
    FocusInsight,
    FocusRecovery,
    RecoveryInstance,
)

__all__ = [
    "FocusAnalyzer",
    "calculate_focus_recovery",
    "count_context_switches",
    "detect_deep_focus_periods",
    "generate_context_switch_report",
    "measure_distraction_impact",
    "generate_focus_insights",
    "DeepFocus",
    "DeepFocusPeriod",
    "DistractionImpact",
    "FocusAnalysisReport",
    "FocusInsight",
    "FocusRecovery",
    "RecoveryInstance",
]
