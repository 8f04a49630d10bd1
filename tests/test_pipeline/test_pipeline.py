"""Tests for end-to-end session finalization."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from focus_insights.classifier.models import Visit
from focus_insights.exceptions import LLMError, StorageReadError, StorageWriteError
from focus_insights.focus.analyzer import FocusAnalyzer
from focus_insights.insights.dispatcher import AI_INSIGHT, LOCAL_INSIGHT, InsightDispatcher
from focus_insights.pipeline import SessionPipeline
from focus_insights.session.models import CompletedSession
from focus_insights.storage.archive import SessionArchive
from focus_insights.storage.memory import InMemoryKeyValueStore


def _completed(session_id="session_1", minutes=30, urls=None):
    urls = urls or [
        "https://github.com/a",
        "https://youtube.com/watch",
        "https://github.com/b",
        "https://stackoverflow.com/q",
        "https://reddit.com/r",
        "https://github.com/c",
    ]
    visits = tuple(
        Visit(url=url, title="t", timestamp=f"2024-01-15T09:{i * 4:02d}:00.000Z")
        for i, url in enumerate(urls)
    )
    return CompletedSession(
        session_id=session_id,
        start_time="2024-01-15T09:00:00.000Z",
        end_time=f"2024-01-15T09:{minutes:02d}:00.000Z",
        visits=visits,
    )


def test_finalize_empty_session_saves_nothing():
    archive = SessionArchive(InMemoryKeyValueStore())
    pipeline = SessionPipeline(archive)
    empty = CompletedSession("s", "2024-01-15T09:00:00Z", "2024-01-15T09:30:00Z", ())
    assert asyncio.run(pipeline.finalize(empty)) is None
    assert asyncio.run(archive.load_sessions()) == []


def test_finalize_complex_session_with_ai():
    generator = AsyncMock()
    generator.generate_insight.return_value = "AI says well done."
    archive = SessionArchive(InMemoryKeyValueStore())
    pipeline = SessionPipeline(archive, InsightDispatcher(generator), focus_analyzer=FocusAnalyzer())

    summary = asyncio.run(pipeline.finalize(_completed()))
    assert summary.ai_insight == "AI says well done."
    assert summary.is_ai_generated
    assert summary.focus_analysis is not None
    assert pipeline.last_result.outcome == AI_INSIGHT

    latest = asyncio.run(archive.get_latest())
    assert latest.ai_insight == "AI says well done."
    assert latest.is_ai_generated


def test_finalize_ai_failure_still_saves():
    generator = AsyncMock()
    generator.generate_insight.side_effect = LLMError("quota")
    archive = SessionArchive(InMemoryKeyValueStore())
    pipeline = SessionPipeline(archive, InsightDispatcher(generator))

    summary = asyncio.run(pipeline.finalize(_completed()))
    assert summary.ai_insight
    assert not summary.is_ai_generated
    assert pipeline.last_result.outcome == LOCAL_INSIGHT
    assert [s.session_id for s in asyncio.run(archive.load_sessions())] == ["session_1"]


def test_finalize_short_session_uses_local_insight():
    generator = AsyncMock()
    pipeline = SessionPipeline(SessionArchive(InMemoryKeyValueStore()), InsightDispatcher(generator))
    completed = _completed(minutes=8, urls=["https://github.com/a", "https://youtube.com/b"])

    summary = asyncio.run(pipeline.finalize(completed))
    assert summary.duration.minutes == 8
    assert not summary.is_ai_generated
    generator.generate_insight.assert_not_called()


def _archived(make_summary, count):
    history = [
        make_summary(session_id=f"h{i}", start_time=f"2024-01-{i + 1:02d}T09:00:00Z", stars=4,
                     productive_percentage=50)
        for i in range(count)
    ]
    return InMemoryKeyValueStore({"sessions": [h.to_dict() for h in history], "sessionCount": count})


def test_finalize_milestone_after_ten_saved_sessions(make_summary):
    store = _archived(make_summary, 10)
    generator = AsyncMock()
    generator.generate_insight.return_value = "Ten sessions in."
    pipeline = SessionPipeline(SessionArchive(store), InsightDispatcher(generator))
    # 50% productive, short: only the milestone rule can fire
    completed = _completed(minutes=8, urls=["https://github.com/a", "https://example.com/"])

    asyncio.run(pipeline.finalize(completed))
    assert pipeline.last_result.decision.is_milestone_session
    generator.generate_insight.assert_awaited_once()
    assert asyncio.run(SessionArchive(store).session_count()) == 11


def test_finalize_ninth_saved_session_is_not_milestone(make_summary):
    store = _archived(make_summary, 9)
    pipeline = SessionPipeline(SessionArchive(store))
    completed = _completed(minutes=8, urls=["https://github.com/a", "https://example.com/"])

    asyncio.run(pipeline.finalize(completed))
    assert not pipeline.last_result.decision.is_milestone_session
    assert asyncio.run(SessionArchive(store).session_count()) == 10


def test_finalize_history_read_failure_is_tolerated():
    archive = SessionArchive(InMemoryKeyValueStore())
    archive.load_sessions = AsyncMock(side_effect=StorageReadError("unreadable"))
    pipeline = SessionPipeline(archive)

    summary = asyncio.run(pipeline.finalize(_completed()))
    assert summary.ai_insight
    assert asyncio.run(archive.get_latest()).session_id == "session_1"


def test_finalize_save_failure_raises():
    archive = SessionArchive(InMemoryKeyValueStore())
    archive.save_session = AsyncMock(side_effect=StorageWriteError("disk full"))
    pipeline = SessionPipeline(archive)

    with pytest.raises(StorageWriteError):
        asyncio.run(pipeline.finalize(_completed()))
    assert pipeline.last_summary.session_id == "session_1"
    assert pipeline.last_summary.ai_insight
