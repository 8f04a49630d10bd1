"""Turn a focus report into short typed remarks for display or prompts."""

from __future__ import annotations

from focus_insights.focus.models import FocusAnalysisReport, FocusInsight

# Commonly cited time to regain deep focus after an interruption.
REFOCUS_BENCHMARK_MINUTES = 12


def generate_focus_insights(report: FocusAnalysisReport | None) -> list[FocusInsight]:
    if report is None or not report.has_significant_data:
        return []

    insights: list[FocusInsight] = []

    recovery = report.focus_recovery
    if recovery is not None:
        avg = recovery.average_recovery_minutes
        lost = recovery.total_time_lost
        if avg >= REFOCUS_BENCHMARK_MINUTES:
            insights.append(FocusInsight(
                "warning",
                f"It took you an average of {avg} minutes to refocus after distractions. "
                f"Regaining deep focus usually takes 12+ minutes. Total time lost: {lost} minutes.",
            ))
        elif avg >= 8:
            insights.append(FocusInsight(
                "info",
                f"Your average focus recovery time is {avg} minutes, faster than the "
                f"12-minute benchmark. Total recovery time: {lost} minutes.",
            ))
        else:
            insights.append(FocusInsight(
                "success",
                f"You recovered focus in just {avg} minutes on average. "
                "You're bouncing back quickly from distractions.",
            ))

    deep = report.deep_focus
    if deep is not None:
        if deep.period_count >= 3:
            insights.append(FocusInsight(
                "success",
                f"You achieved {deep.period_count} deep focus periods! Your longest was "
                f"{deep.longest_period_minutes} minutes. Average focus block: "
                f"{deep.average_period_minutes} minutes.",
            ))
        elif deep.period_count > 0:
            insights.append(FocusInsight(
                "info",
                f"You had {deep.period_count} deep focus period(s). Longest: "
                f"{deep.longest_period_minutes} minutes. Try to stretch focus blocks to 25+ minutes.",
            ))

    impact = report.distraction_impact
    if impact is not None:
        if impact.distraction_percentage >= 30:
            insights.append(FocusInsight(
                "warning",
                f"Distractions consumed {impact.distraction_percentage}% of your session "
                f"({impact.total_distraction_minutes} minutes). Consider a site blocker "
                "during focused work.",
            ))
        elif impact.distraction_percentage >= 15:
            insights.append(FocusInsight(
                "info",
                f"Distractions took {impact.distraction_percentage}% of your time "
                f"({impact.total_distraction_minutes} minutes).",
            ))

    switches = report.total_context_switches
    if switches >= 10:
        insights.append(FocusInsight(
            "warning",
            f"You switched contexts {switches} times. Try batching similar tasks.",
        ))
    elif switches >= 5:
        insights.append(FocusInsight(
            "info",
            f"You had {switches} context switches. Keep this number low for better focus.",
        ))
    elif switches > 0:
        insights.append(FocusInsight(
            "success",
            f"Only {switches} context switches! You kept excellent focus discipline.",
        ))

    return insights
