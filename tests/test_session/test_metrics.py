"""Tests for session metrics aggregation."""

from focus_insights.classifier.models import CategorizedVisit, Category, Visit
from focus_insights.focus.analyzer import FocusAnalyzer, count_context_switches
from focus_insights.session.metrics import (
    analyze_urls,
    build_session_summary,
    calculate_focus_switches,
    get_top_domains,
)

PRODUCTIVE = "https://github.com/a"
DISTRACTING = "https://youtube.com/watch"
NEUTRAL = "https://example.com/"


def _visits(*urls, start_minute=0):
    return [
        Visit(url=url, title="t", timestamp=f"2024-01-15T09:{start_minute + i:02d}:00Z")
        for i, url in enumerate(urls)
    ]


def test_focus_switches_productive_distracting_productive():
    assert calculate_focus_switches(_visits(PRODUCTIVE, DISTRACTING, PRODUCTIVE)) == 2


def test_focus_switches_separated_by_neutral_is_zero():
    assert calculate_focus_switches(_visits(NEUTRAL, PRODUCTIVE, NEUTRAL, DISTRACTING)) == 0


def test_focus_switches_unchanged_by_inserted_neutral():
    base = [PRODUCTIVE, PRODUCTIVE, DISTRACTING, PRODUCTIVE]
    with_neutral = [PRODUCTIVE, NEUTRAL, PRODUCTIVE, DISTRACTING, PRODUCTIVE, NEUTRAL]
    assert calculate_focus_switches(_visits(*base)) == calculate_focus_switches(_visits(*with_neutral))


def test_focus_switches_empty():
    assert calculate_focus_switches([]) == 0


def test_focus_switches_use_existing_categories():
    visits = [
        CategorizedVisit(url=NEUTRAL, title="t", timestamp="2024-01-15T09:00:00Z",
                         domain="example.com", category=Category.PRODUCTIVE),
        CategorizedVisit(url=NEUTRAL, title="t", timestamp="2024-01-15T09:01:00Z",
                         domain="example.com", category=Category.DISTRACTING),
    ]
    assert calculate_focus_switches(visits) == 1
    assert count_context_switches(visits) == 1


def test_analyze_urls_totals_add_up():
    visits = _visits(PRODUCTIVE, DISTRACTING, NEUTRAL, PRODUCTIVE, "https://reddit.com/")
    analysis = analyze_urls(visits)
    totals = analysis.totals
    assert totals["productive"] == 2
    assert totals["distracting"] == 2
    assert totals["neutral"] == 1
    assert totals["productive"] + totals["distracting"] + totals["neutral"] == totals["total"] == 5
    assert len(analysis.categorized[Category.PRODUCTIVE]) == 2


def test_analyze_urls_domain_counts_first_seen_order():
    analysis = analyze_urls(_visits(DISTRACTING, PRODUCTIVE, DISTRACTING))
    assert list(analysis.domain_counts.items()) == [("youtube.com", 2), ("github.com", 1)]


def test_top_domains_sorted_and_limited():
    counts = {"a.com": 1, "b.com": 5, "c.com": 3, "d.com": 5}
    top = get_top_domains(counts, limit=3)
    assert [d.domain for d in top] == ["b.com", "d.com", "c.com"]
    assert [d.count for d in top] == [5, 5, 3]


def test_top_domains_shorter_than_limit():
    top = get_top_domains({"a.com": 2, "b.com": 1})
    assert len(top) == 2


def test_build_session_summary_metrics_and_duration():
    visits = _visits(PRODUCTIVE, PRODUCTIVE, DISTRACTING, NEUTRAL)
    summary = build_session_summary(
        "session_1", "2024-01-15T09:00:00.000Z", "2024-01-15T09:25:30.900Z", visits
    )
    assert summary.duration.seconds == 1530
    assert summary.duration.minutes == 25
    assert summary.duration.formatted == "25m 30s"
    assert summary.metrics.total_visits == 4
    assert summary.metrics.productive_percentage == 50
    assert summary.metrics.distracting_percentage == 25
    assert summary.metrics.neutral_percentage == 25
    assert summary.metrics.focus_switches == 1
    assert summary.top_domains[0].domain == "github.com"
    assert summary.focus_analysis is None
    assert summary.ai_insight is None


def test_build_session_summary_percentages_round_half_up():
    # 1 of 8 visits is 12.5%
    visits = _visits(PRODUCTIVE, *[NEUTRAL] * 7)
    summary = build_session_summary("s", "2024-01-15T09:00:00Z", "2024-01-15T09:10:00Z", visits)
    assert summary.metrics.productive_percentage == 13


def test_build_session_summary_visited_domains_are_anonymized():
    visits = _visits(PRODUCTIVE, DISTRACTING)
    summary = build_session_summary("s", "2024-01-15T09:00:00Z", "2024-01-15T09:10:00Z", visits)
    record = summary.to_dict()
    assert record["visitedDomains"] == [
        {"domain": "github.com", "category": "productive", "timestamp": "2024-01-15T09:00:00Z"},
        {"domain": "youtube.com", "category": "distracting", "timestamp": "2024-01-15T09:01:00Z"},
    ]
    assert "url" not in record["visitedDomains"][0]


def test_build_session_summary_with_focus_analyzer():
    visits = [
        Visit(url=DISTRACTING, title="", timestamp="2024-01-15T09:00:00Z"),
        Visit(url=PRODUCTIVE, title="", timestamp="2024-01-15T09:09:00Z"),
        Visit(url=PRODUCTIVE, title="", timestamp="2024-01-15T09:20:00Z"),
    ]
    summary = build_session_summary(
        "s", "2024-01-15T09:00:00Z", "2024-01-15T09:30:00Z", visits, focus_analyzer=FocusAnalyzer()
    )
    report = summary.focus_analysis
    assert report is not None
    assert report.focus_recovery.recovery_count == 1
    assert report.deep_focus.period_count == 1


def test_build_session_summary_no_visits():
    summary = build_session_summary("s", "2024-01-15T09:00:00Z", "2024-01-15T09:01:00Z", [])
    assert summary.metrics.total_visits == 0
    assert summary.metrics.productive_percentage == 0
    assert summary.top_domains == []


def test_build_session_summary_unparseable_bounds():
    summary = build_session_summary("s", "garbage", "2024-01-15T09:01:00Z", _visits(PRODUCTIVE))
    assert summary.duration.seconds == 0
