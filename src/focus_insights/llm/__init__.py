"""LLM client wrapper (Anthropic Claude)."""

from focus_insights.llm.client import DEFAULT_MODEL, AsyncLLMClient

__all__ = ["DEFAULT_MODEL", "AsyncLLMClient"]
