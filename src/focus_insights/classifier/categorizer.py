"""Classify URLs as productive, distracting or neutral by domain."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from focus_insights.classifier.domains import DISTRACTING_DOMAINS, PRODUCTIVE_DOMAINS
from focus_insights.classifier.models import CategorizedVisit, Category, Visit

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> str:
    """Return the hostname of ``url`` without a leading ``www.``; "" if malformed."""
    try:
        hostname = urlparse((url or "").strip()).hostname
    except ValueError as e:
        logger.debug("Cannot parse URL %r: %s", url, e)
        return ""
    if not hostname:
        return ""
    return _normalize_domain(hostname)


def categorize_url(
    url: str,
    productive_domains: list[str] | None = None,
    distracting_domains: list[str] | None = None,
) -> Category:
    """Categorize a URL; the first matching list wins, unmatched is neutral."""
    domain = extract_domain(url)
    if not domain:
        return Category.NEUTRAL

    productive = PRODUCTIVE_DOMAINS if productive_domains is None else productive_domains
    distracting = DISTRACTING_DOMAINS if distracting_domains is None else distracting_domains

    if _matches_any(domain, productive):
        return Category.PRODUCTIVE
    if _matches_any(domain, distracting):
        return Category.DISTRACTING
    return Category.NEUTRAL


def categorize_visit(visit: Visit) -> CategorizedVisit:
    """Attach domain and category to a raw visit."""
    if isinstance(visit, CategorizedVisit):
        return visit
    return CategorizedVisit(
        url=visit.url,
        title=visit.title,
        timestamp=visit.timestamp,
        domain=extract_domain(visit.url),
        category=categorize_url(visit.url),
    )


def _normalize_domain(hostname: str) -> str:
    domain = hostname.strip().lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def _matches_any(domain: str, patterns: list[str]) -> bool:
    return any(pattern and pattern in domain for pattern in patterns)
