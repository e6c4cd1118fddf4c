"""
Tests for the SQLite reminder store.
"""

import threading
from datetime import date

import pytest

from daily_note_sync.models import DateKey
from daily_note_sync.reminder_store import ReminderStore


DAY = DateKey(date(2024, 1, 5))


@pytest.fixture
def store(tmp_path):
    return ReminderStore(db_path=tmp_path / "reminders.db")


class TestReminderStore:

    def test_add_and_get(self, store):
        added = store.add("Buy milk", DAY, source_file="groceries.md")
        fetched = store.get(added.key())
        assert fetched.title == "Buy milk"
        assert fetched.scheduled_date == DAY
        assert fetched.source_file == "groceries.md"
        assert fetched.done is False

    def test_get_unknown(self, store):
        assert store.get("nope") is None

    def test_by_date_filters_and_orders_by_priority(self, store):
        low = store.add("Low", DAY, priority=0)
        high = store.add("High", DAY, priority=9)
        store.add("Tomorrow", DateKey(date(2024, 1, 6)))

        keys = [r.key() for r in store.by_date(DAY)]
        assert keys == [high.key(), low.key()]

    def test_by_date_is_stable(self, store):
        for title in ("a", "b", "c"):
            store.add(title, DAY)
        first = [r.key() for r in store.by_date(DAY)]
        second = [r.key() for r in store.by_date(DAY)]
        assert first == second

    def test_all_reminders(self, store):
        store.add("one", DAY)
        store.add("two", DateKey(date(2024, 1, 6)))
        assert len(store.all_reminders) == 2

    def test_delete(self, store):
        r = store.add("gone", DAY)
        store.delete(r.key())
        assert store.get(r.key()) is None

    def test_set_done_unknown_raises(self, store):
        with pytest.raises(KeyError):
            store.set_done("missing", True)

    @pytest.mark.asyncio
    async def test_update_sink_changes_only_done(self, store):
        r = store.add("Buy milk", DAY, source_file="groceries.md", priority=3)
        await store.update_reminder_done(r, True)

        assert r.done is True
        fetched = store.get(r.key())
        assert fetched.done is True
        assert fetched.title == "Buy milk"
        assert fetched.source_file == "groceries.md"
        assert fetched.priority == 3

    @pytest.mark.asyncio
    async def test_update_sink_is_logged(self, store):
        r = store.add("Buy milk", DAY)
        await store.update_reminder_done(r, True)

        logs = store.get_recent_logs(limit=1)
        assert logs[0]["action"] == "complete"
        assert logs[0]["reminder_id"] == r.key()
        assert logs[0]["details"]["title"] == "Buy milk"

    @pytest.mark.asyncio
    async def test_update_sink_runs_off_event_loop(self, store, monkeypatch):
        r = store.add("Buy milk", DAY)
        threads = []
        set_done = store.set_done

        def recording_set_done(reminder_id, done):
            threads.append(threading.get_ident())
            set_done(reminder_id, done)

        monkeypatch.setattr(store, "set_done", recording_set_done)
        await store.update_reminder_done(r, True)

        assert threads and threads[0] != threading.get_ident()
        assert store.get(r.key()).done is True

    @pytest.mark.asyncio
    async def test_stats(self, store):
        a = store.add("a", DAY)
        store.add("b", DateKey(date(2024, 1, 6)))
        await store.update_reminder_done(a, True)

        assert store.get_stats() == {
            "total_reminders": 2,
            "done": 1,
            "open": 1,
            "scheduled_dates": 2,
        }
