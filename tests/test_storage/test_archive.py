"""Tests for the session archive."""

import asyncio

import pytest

from focus_insights.exceptions import SessionNotFoundError, StorageReadError, StorageWriteError
from focus_insights.session.models import UserRating
from focus_insights.storage.archive import SessionArchive
from focus_insights.storage.base import BaseKeyValueStore
from focus_insights.storage.memory import InMemoryKeyValueStore


class BrokenStore(BaseKeyValueStore):
    def __init__(self, fail_reads=False, fail_writes=False):
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key, default=None):
        if self.fail_reads:
            raise OSError("disk gone")
        return default

    async def set(self, key, value):
        if self.fail_writes:
            raise OSError("disk full")

    async def delete(self, key):
        pass


def test_save_and_load(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        count = await archive.save_session(make_summary(session_id="a"))
        return count, await archive.load_sessions(), await archive.get_latest(), await archive.session_count()

    count, sessions, latest, total = asyncio.run(run())
    assert count == 1
    assert [s.session_id for s in sessions] == ["a"]
    assert latest.session_id == "a"
    assert total == 1


def test_fifo_eviction_at_capacity(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        for i in range(50):
            await archive.save_session(make_summary(session_id=f"s{i}"))
        await archive.save_session(make_summary(session_id="s50"))
        return await archive.load_sessions(), await archive.session_count()

    sessions, total = asyncio.run(run())
    assert len(sessions) == 50
    assert sessions[0].session_id == "s1"
    assert sessions[-1].session_id == "s50"
    assert total == 51


def test_small_capacity(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore(), max_sessions=2)
        for i in range(4):
            await archive.save_session(make_summary(session_id=f"s{i}"))
        return await archive.load_sessions()

    assert [s.session_id for s in asyncio.run(run())] == ["s2", "s3"]


def test_invalid_capacity():
    with pytest.raises(ValueError):
        SessionArchive(InMemoryKeyValueStore(), max_sessions=0)


def test_count_falls_back_to_archive_length(make_summary):
    store = InMemoryKeyValueStore({"sessions": [make_summary().to_dict(), make_summary().to_dict()]})
    assert asyncio.run(SessionArchive(store).session_count()) == 2


def test_attach_rating_updates_latest_and_archive(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        await archive.save_session(make_summary(session_id="a"))
        await archive.save_session(make_summary(session_id="b"))
        updated = await archive.attach_rating("b", UserRating(stars=4, tags=["quiet"]))
        return updated, await archive.load_sessions(), await archive.get_latest()

    updated, sessions, latest = asyncio.run(run())
    assert updated.stars == 4
    assert sessions[1].stars == 4
    assert sessions[0].user_rating is None
    assert latest.stars == 4
    assert latest.user_rating.tags == ["quiet"]


def test_attach_rating_to_older_session_keeps_latest(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        await archive.save_session(make_summary(session_id="a"))
        await archive.save_session(make_summary(session_id="b"))
        await archive.attach_rating("a", UserRating(stars=2))
        return await archive.load_sessions(), await archive.get_latest()

    sessions, latest = asyncio.run(run())
    assert sessions[0].stars == 2
    assert latest.session_id == "b"
    assert latest.user_rating is None


def test_attach_skipped_rating(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        await archive.save_session(make_summary(session_id="a"))
        await archive.attach_rating("a", UserRating.skip())
        return await archive.recent_rated_sessions()

    assert asyncio.run(run()) == []


def test_attach_rating_unknown_session():
    archive = SessionArchive(InMemoryKeyValueStore())
    with pytest.raises(SessionNotFoundError):
        asyncio.run(archive.attach_rating("missing", UserRating(stars=3)))


def test_recent_rated_sessions(make_summary):
    async def run():
        archive = SessionArchive(InMemoryKeyValueStore())
        for i, stars in enumerate([3, None, 4, 5]):
            await archive.save_session(
                make_summary(session_id=f"s{i}", start_time=f"2024-01-1{i}T09:00:00Z", stars=stars)
            )
        return await archive.recent_rated_sessions(limit=2)

    assert [s.session_id for s in asyncio.run(run())] == ["s3", "s2"]


def test_store_failures_are_wrapped(make_summary):
    read_archive = SessionArchive(BrokenStore(fail_reads=True))
    with pytest.raises(StorageReadError):
        asyncio.run(read_archive.load_sessions())

    write_archive = SessionArchive(BrokenStore(fail_writes=True))
    with pytest.raises(StorageWriteError):
        asyncio.run(write_archive.save_session(make_summary()))
