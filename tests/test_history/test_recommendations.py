"""Tests for personalized recommendations."""

from focus_insights.history.recommendations import (
    RecommendationPolicy,
    generate_personalized_recommendations,
)


def _titles(recommendations):
    return [r.title for r in recommendations]


def test_no_history_no_recommendations(make_summary):
    assert generate_personalized_recommendations([]) == []
    assert generate_personalized_recommendations([make_summary()]) == []


def test_improving_trend_and_best_session_habits(make_summary):
    stars = [3, 3, 3, 4, 5, 5]
    sessions = [
        make_summary(start_time=f"2024-01-{10 + i}T09:00:00", stars=s, focus_switches=2, minutes=40)
        for i, s in enumerate(stars)
    ]
    titles = _titles(generate_personalized_recommendations(sessions))
    assert titles[0] == "You're On Fire!"
    assert "Your Sweet Spot" in titles
    assert "Focus Strategy" in titles
    assert "Too Much Switching" not in titles


def test_correlation_and_switching_warnings(make_summary):
    sessions = [
        make_summary(stars=5, focus_switches=8, distracting_percentage=5),
        make_summary(stars=4, focus_switches=9, distracting_percentage=5),
        make_summary(stars=3, focus_switches=12, distracting_percentage=20),
        make_summary(stars=2, focus_switches=15, distracting_percentage=40),
        make_summary(stars=1, focus_switches=17, distracting_percentage=50),
    ]
    recommendations = generate_personalized_recommendations(sessions)
    titles = _titles(recommendations)
    assert "Focus Switches Matter" in titles
    assert "Distractions Impact" in titles
    assert "Too Much Switching" in titles
    assert all(r.type in ("success", "info", "warning") for r in recommendations)


def test_policy_thresholds_can_be_overridden(make_summary):
    class Strict(RecommendationPolicy):
        overall_focus_switches_above = 1

    sessions = [make_summary(stars=3, focus_switches=2)]
    assert "Too Much Switching" in _titles(generate_personalized_recommendations(sessions, Strict()))
    assert "Too Much Switching" not in _titles(generate_personalized_recommendations(sessions))
