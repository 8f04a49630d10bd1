"""Unified exception hierarchy for focus-insights."""


class FocusInsightsError(Exception):
    """Base exception for all focus-insights errors."""


# Session lifecycle
class SessionStateError(FocusInsightsError):
    """Operation not allowed in the current session state."""


# Storage
class StorageError(FocusInsightsError):
    """Base exception for key-value store and archive operations."""


class StorageReadError(StorageError):
    """Failed to read from the key-value store."""


class StorageWriteError(StorageError):
    """Failed to write to the key-value store."""


class SessionNotFoundError(StorageError):
    """No archived session matches the requested id."""


# LLM
class LLMError(FocusInsightsError):
    """Base exception for LLM client operations."""


class InsightGenerationError(LLMError):
    """The external insight capability returned no usable text."""
