"""Tests for the domain classifier."""

from focus_insights.classifier.categorizer import categorize_url, categorize_visit, extract_domain
from focus_insights.classifier.models import CategorizedVisit, Category, Visit


def test_extract_domain_strips_www_and_path():
    assert extract_domain("https://www.github.com/user/repo?tab=1#readme") == "github.com"


def test_extract_domain_lowercases():
    assert extract_domain("https://WWW.YouTube.COM/watch") == "youtube.com"


def test_extract_domain_keeps_subdomains():
    assert extract_domain("https://docs.python.org/3/") == "docs.python.org"


def test_extract_domain_malformed_returns_empty():
    assert extract_domain("not a url") == ""
    assert extract_domain("") == ""
    assert extract_domain("http://[::1") == ""


def test_categorize_productive():
    assert categorize_url("https://stackoverflow.com/questions/1") == Category.PRODUCTIVE


def test_categorize_distracting():
    assert categorize_url("https://www.reddit.com/r/python") == Category.DISTRACTING


def test_categorize_subdomain_matches_by_substring():
    assert categorize_url("https://old.reddit.com/") == Category.DISTRACTING
    assert categorize_url("https://en.wikipedia.org/wiki/Focus") == Category.PRODUCTIVE


def test_categorize_unknown_is_neutral():
    assert categorize_url("https://example.com") == Category.NEUTRAL


def test_categorize_malformed_is_neutral():
    assert categorize_url("::::") == Category.NEUTRAL


def test_productive_checked_before_distracting():
    result = categorize_url(
        "https://both.example.com",
        productive_domains=["example.com"],
        distracting_domains=["both.example"],
    )
    assert result == Category.PRODUCTIVE


def test_categorize_visit_attaches_domain_and_category():
    visit = Visit(url="https://github.com/x", title="Repo", timestamp="2024-01-01T10:00:00Z")
    result = categorize_visit(visit)
    assert isinstance(result, CategorizedVisit)
    assert result.domain == "github.com"
    assert result.category == Category.PRODUCTIVE
    assert result.title == "Repo"


def test_categorize_visit_passes_through_categorized():
    visit = CategorizedVisit(
        url="https://x.test", title="", timestamp="", domain="x.test", category=Category.DISTRACTING
    )
    assert categorize_visit(visit) is visit


def test_category_is_str_enum():
    assert Category.PRODUCTIVE == "productive"
    assert Category("neutral") is Category.NEUTRAL
