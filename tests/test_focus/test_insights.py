"""Tests for focus report remarks."""

from focus_insights.focus.insights import generate_focus_insights
from focus_insights.focus.models import DeepFocus, DistractionImpact, FocusAnalysisReport, FocusRecovery


def _recovery(avg):
    return FocusRecovery(
        average_recovery_minutes=avg,
        max_recovery_minutes=avg,
        min_recovery_minutes=avg,
        recovery_count=1,
        total_time_lost=avg,
    )


def test_no_report_no_insights():
    assert generate_focus_insights(None) == []
    assert generate_focus_insights(FocusAnalysisReport(total_context_switches=4)) == []


def test_slow_recovery_warns():
    report = FocusAnalysisReport(total_context_switches=0, focus_recovery=_recovery(14))
    insights = generate_focus_insights(report)
    assert insights[0].type == "warning"
    assert "14" in insights[0].text


def test_fast_recovery_succeeds():
    report = FocusAnalysisReport(total_context_switches=0, focus_recovery=_recovery(3))
    assert generate_focus_insights(report)[0].type == "success"


def test_deep_focus_distraction_and_switches():
    report = FocusAnalysisReport(
        total_context_switches=12,
        deep_focus=DeepFocus(
            period_count=3,
            total_deep_focus_minutes=45,
            average_period_minutes=15,
            longest_period_minutes=20,
        ),
        distraction_impact=DistractionImpact(
            total_distraction_minutes=10,
            distraction_percentage=20,
            productive_minutes=40,
            distraction_session_count=2,
            average_distraction_length=5,
        ),
    )
    types = [i.type for i in generate_focus_insights(report)]
    assert types == ["success", "info", "warning"]
