"""Per-session insight dispatch, local templates and weekly summaries."""

from focus_insights.insights.dispatcher import (
    AI_INSIGHT,
    LOCAL_INSIGHT,
    DispatchDecision,
    DispatchPolicy,
    GenerationResult,
    InsightDispatcher,
    InsightGenerator,
    InsightResult,
    LLMInsightGenerator,
    evaluate_dispatch,
)
from focus_insights.insights.local import generate_fallback_insight, generate_local_insight
from focus_insights.insights.prompts import build_session_prompt, build_weekly_prompt
from focus_insights.insights.weekly import WeeklyStats, WeeklySummarizer, WeeklySummary

__all__ = [
    "AI_INSIGHT",
    "LOCAL_INSIGHT",
    "DispatchDecision",
    "DispatchPolicy",
    "GenerationResult",
    "InsightDispatcher",
    "InsightGenerator",
    "InsightResult",
    "LLMInsightGenerator",
    "evaluate_dispatch",
    "generate_fallback_insight",
    "generate_local_insight",
    "build_session_prompt",
    "build_weekly_prompt",
    "WeeklyStats",
    "WeeklySummarizer",
    "WeeklySummary",
]
