"""Prompt text for the session and weekly insight requests."""

from __future__ import annotations

from focus_insights.history.models import HistoricalContext
from focus_insights.session.models import SessionSummary
from focus_insights.utils import mean, round_half_up

SYSTEM_PROMPT = (
    "You are an empathetic AI productivity coach who reviews browser focus "
    "sessions. Be encouraging, specific, and actionable."
)

PROMPT_TOP_DOMAINS = 5
HISTORY_TREND_THRESHOLD = 0.3
CURRENT_VS_HISTORY_THRESHOLD = 0.5


def build_session_prompt(summary: SessionSummary, history: HistoricalContext | None = None) -> str:
    duration = summary.duration
    metrics = summary.metrics

    if summary.top_domains:
        domains_text = ", ".join(
            f"{d.domain} ({d.count} visits)" for d in summary.top_domains[:PROMPT_TOP_DOMAINS]
        )
    else:
        domains_text = "none recorded"

    focus_section = _focus_section(summary)
    history_section = _history_section(summary, history)

    if history_section:
        steps = [
            "Acknowledges their session pattern with empathy and historical context",
            "Highlights what they did well (especially if focus recovery time < 12 min or deep focus periods)",
            "Compares to their typical performance and notes trends",
            "Offers specific recommendations based on their history",
        ]
    else:
        steps = [
            "Acknowledges their session pattern with empathy",
            "Highlights what they did well (especially if focus recovery time < 12 min or deep focus periods)",
            "Offers 1-2 specific, actionable recommendations",
            "Mention the 12-minute focus recovery principle if relevant",
        ]
    steps.append("Ends with encouragement")
    numbered = "\n".join(f"{i}. {step}" for i, step in enumerate(steps, start=1))

    return (
        "Analyze this browsing session and provide a personalized, narrative insight in 2-3 paragraphs.\n"
        "\n"
        "Session Data:\n"
        f"- Duration: {duration.formatted} ({duration.minutes} minutes)\n"
        f"- Total sites visited: {metrics.total_visits}\n"
        f"- Productive sites: {metrics.productive_visits} ({metrics.productive_percentage}%)\n"
        f"- Distracting sites: {metrics.distracting_visits} ({metrics.distracting_percentage}%)\n"
        f"- Neutral sites: {metrics.neutral_visits}\n"
        f"- Focus switches: {metrics.focus_switches}\n"
        f"- Top domains: {domains_text}{focus_section}{history_section}\n"
        "\n"
        "Write a personalized insight that:\n"
        f"{numbered}\n"
        "\n"
        "Keep it conversational, warm, and under 150 words. Don't use bullet points. "
        "Write in natural paragraphs."
    )


def build_weekly_prompt(stats) -> str:
    """Prompt for the weekly summary; ``stats`` is a ``WeeklyStats``."""
    hours, minutes = divmod(stats.total_minutes, 60)
    domains = ", ".join(stats.top_domains) or "none recorded"
    return (
        "Analyze this week's study sessions and provide a comprehensive weekly summary "
        "in 3-4 paragraphs. Be insightful, encouraging, and strategic.\n"
        "\n"
        "Weekly Overview:\n"
        f"- Total sessions: {stats.total_sessions}\n"
        f"- Rated sessions: {stats.rated_sessions}\n"
        f"- Total study time: {hours}h {minutes}m\n"
        f"- Average rating: {stats.average_rating:.1f} stars\n"
        f"- Average productivity: {stats.average_productivity}%\n"
        f"- Average focus switches: {stats.average_focus_switches:.1f}\n"
        f"- Trend: {stats.trend_direction}\n"
        "\n"
        "Session Highlights:\n"
        f"- Best session: {stats.best_stars} stars with {stats.best_productivity}% productivity\n"
        f"- Worst session: {stats.worst_stars} stars with {stats.worst_productivity}% productivity\n"
        f"- Most used domains: {domains}\n"
        "\n"
        "Write a comprehensive weekly summary that:\n"
        "1. Celebrates wins and progress (be specific about what's working)\n"
        "2. Identifies patterns - what made the best sessions successful vs what held back weaker ones\n"
        f"3. Notes the trend direction and what it means ({stats.trend_direction})\n"
        "4. Provides 2-3 strategic recommendations for next week based on the data\n"
        "5. Ends with personalized encouragement and actionable next steps\n"
        "\n"
        "Keep it conversational yet insightful, around 200-250 words."
    )


def _focus_section(summary: SessionSummary) -> str:
    report = summary.focus_analysis
    if report is None or not report.has_significant_data:
        return ""

    lines = ["", "", "Focus & Context Switching:"]
    if report.focus_recovery is not None:
        recovery = report.focus_recovery
        lines.append(
            f"- Average focus recovery time: {recovery.average_recovery_minutes} minutes "
            f"(after {recovery.recovery_count} distractions)"
        )
        lines.append(f"- Total time lost to recovery: {recovery.total_time_lost} minutes")
    if report.deep_focus is not None:
        deep = report.deep_focus
        lines.append(f"- Deep focus periods: {deep.period_count} (longest: {deep.longest_period_minutes} min)")
        lines.append(f"- Total deep focus time: {deep.total_deep_focus_minutes} minutes")
    if report.distraction_impact is not None:
        impact = report.distraction_impact
        lines.append(
            f"- Time on distractions: {impact.total_distraction_minutes} minutes "
            f"({impact.distraction_percentage}%)"
        )
    lines.append(f"- Total context switches: {report.total_context_switches}")
    return "\n".join(lines)


def _history_section(summary: SessionSummary, history: HistoricalContext | None) -> str:
    if history is None or not history.recent_sessions:
        return ""
    recent = history.recent_sessions

    avg_rating = mean([s.stars for s in recent])
    lines = [
        "",
        "",
        f"Historical Context (Last {len(recent)} Sessions):",
        f"- Average rating: {avg_rating:.1f} stars",
        f"- Average duration: {round_half_up(mean([s.duration.minutes for s in recent]))} minutes",
        f"- Average productivity: {round_half_up(mean([s.metrics.productive_percentage for s in recent]))}%",
    ]

    if len(recent) >= 3:
        # recent_sessions is newest first
        latest_avg = mean([s.stars for s in recent[:3]])
        if latest_avg > avg_rating + HISTORY_TREND_THRESHOLD:
            lines.append(f"- Trend: Improving! (recent avg: {latest_avg:.1f} stars)")
        elif latest_avg < avg_rating - HISTORY_TREND_THRESHOLD:
            lines.append(f"- Trend: Declining (recent avg: {latest_avg:.1f} stars)")
        else:
            lines.append("- Trend: Stable")

    if summary.is_rated:
        stars = summary.stars
        if stars > avg_rating + CURRENT_VS_HISTORY_THRESHOLD:
            lines.append(f"- This session: Above your average! ({stars} vs {avg_rating:.1f})")
        elif stars < avg_rating - CURRENT_VS_HISTORY_THRESHOLD:
            lines.append(f"- This session: Below your average ({stars} vs {avg_rating:.1f})")

    if history.best_time is not None:
        best = history.best_time
        lines.append(
            f"- Best time of day: {best.period} ({best.time_range}, "
            f"{best.average_rating} stars over {best.session_count} sessions)"
        )
    if history.correlations is not None and history.correlations.focus_switches.difference > 0:
        lines.append(
            f"- Low-rated sessions average {history.correlations.focus_switches.difference} "
            "more focus switches than high-rated ones"
        )
    return "\n".join(lines)
