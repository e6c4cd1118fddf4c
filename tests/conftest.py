"""
Shared pytest fixtures for daily note sync tests.

Provides in-memory stand-ins for the vault, reminder collection and update
sink so the engine can be exercised without touching disk.
"""

import asyncio
from datetime import date
from pathlib import Path
from typing import Awaitable, Callable, Optional

import pytest

from daily_note_sync.config import Settings
from daily_note_sync.models import DateKey, Document, Reminder
from daily_note_sync.notifications import Notice
from daily_note_sync.sync_engine import SyncEngine


DAY = DateKey(date(2024, 1, 5))


class MemoryVault:
    """
    Dict-backed document store.

    on_write, if set, is awaited from inside write(), the way an editor
    fires a "modified" event for the engine's own write. Reads yield to
    the event loop once to behave like real I/O.
    """

    def __init__(self):
        self.files: dict[str, str] = {}
        self.mtimes: dict[str, float] = {}
        self.reads = 0
        self.writes: list[tuple[str, str]] = []
        self.enumerations = 0
        self.on_write: Optional[Callable[[Document], Awaitable[None]]] = None
        self.fail_reads = False

    def add(self, name: str, text: str, mtime: float = 0.0) -> Document:
        self.files[name] = text
        self.mtimes[name] = mtime
        return self.document(name)

    def document(self, name: str) -> Document:
        return Document(path=Path(name), mtime=self.mtimes[name])

    def enumerate_candidate_documents(self) -> list[Document]:
        self.enumerations += 1
        return [self.document(name) for name in self.files]

    async def read(self, document: Document) -> str:
        self.reads += 1
        await asyncio.sleep(0)
        if self.fail_reads:
            raise OSError("disk on fire")
        return self.files[document.path.name]

    async def write(self, document: Document, text: str) -> None:
        self.files[document.path.name] = text
        self.writes.append((document.path.name, text))
        if self.on_write:
            await self.on_write(document)


class MemoryReminders:
    """List-backed reminder collection."""

    def __init__(self, reminders: Optional[list[Reminder]] = None):
        self.reminders = list(reminders or [])

    @property
    def all_reminders(self) -> list[Reminder]:
        return list(self.reminders)

    def by_date(self, date_key: DateKey) -> list[Reminder]:
        return [r for r in self.reminders if r.scheduled_date == date_key]


class RecordingNotifier:
    """Keeps every notice in memory."""

    def __init__(self):
        self.notices: list[tuple[Notice, str]] = []

    def notify(self, notice: Notice, message: str) -> None:
        self.notices.append((notice, message))

    @property
    def kinds(self) -> list[Notice]:
        return [notice for notice, _ in self.notices]


class RecordingUpdater:
    """Update sink that records calls and applies them."""

    def __init__(self):
        self.calls: list[tuple[str, bool]] = []

    async def __call__(self, reminder: Reminder, checked: bool) -> None:
        self.calls.append((reminder.key(), checked))
        reminder.done = checked


@pytest.fixture
def vault():
    return MemoryVault()


@pytest.fixture
def reminders():
    return MemoryReminders([
        Reminder(title="Buy milk", scheduled_date=DAY, source_file="groceries.md", reminder_id="abc123"),
        Reminder(title="Call mom", scheduled_date=DAY, done=True, source_file="family.md", reminder_id="def456"),
        Reminder(title="Other day", scheduled_date=DateKey(date(2024, 1, 6)), reminder_id="zzz999"),
    ])


@pytest.fixture
def updater():
    return RecordingUpdater()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def settings():
    return Settings(auto_embed_enabled=True, section_marker_label="todos")


@pytest.fixture
def engine(vault, reminders, updater, notifier, settings):
    return SyncEngine(vault, reminders, updater, notifier=notifier, settings=settings)
