"""URL to productive/distracting/neutral classification."""

from focus_insights.classifier.categorizer import categorize_url, categorize_visit, extract_domain
from focus_insights.classifier.domains import DISTRACTING_DOMAINS, PRODUCTIVE_DOMAINS
from focus_insights.classifier.models import Category, CategorizedVisit, Visit

__all__ = [
    "categorize_url",
    "categorize_visit",
    "extract_domain",
    "DISTRACTING_DOMAINS",
    "PRODUCTIVE_DOMAINS",
    "Category",
    "CategorizedVisit",
    "Visit",
]
