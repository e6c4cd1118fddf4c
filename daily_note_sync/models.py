"""
Data Models for Daily Note Sync

Defines the date key used to join notes and reminders, the reminder
record the sync engine reads, and the note document handle.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Optional
import re
import uuid


DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")


@dataclass(frozen=True, order=True)
class DateKey:
    """
    A calendar date used as the join key between notes and reminders.

    Always formats as YYYY-MM-DD.
    """
    value: date

    @classmethod
    def now(cls) -> "DateKey":
        """Today's local date."""
        return cls(date.today())

    @classmethod
    def parse(cls, text: str) -> "DateKey":
        """Parse an exact YYYY-MM-DD string, raising ValueError otherwise."""
        return cls(datetime.strptime(text.strip(), "%Y-%m-%d").date())

    @classmethod
    def from_text(cls, candidate: str) -> Optional["DateKey"]:
        """
        Extract the first YYYY-MM-DD pattern from arbitrary text (e.g. a filename).

        Returns None if there is no such pattern or it is not a real date.
        """
        if not candidate:
            return None
        match = DATE_PATTERN.search(candidate)
        if not match:
            return None
        try:
            return cls.parse(match.group(1))
        except ValueError:
            return None

    def to_canonical_string(self) -> str:
        return self.value.strftime("%Y-%m-%d")

    def __str__(self) -> str:
        return self.to_canonical_string()


@dataclass
class Reminder:
    """
    A reminder scheduled for a date.

    The sync engine only reads title, done, source_file, scheduled_date and
    key(); the only field it ever asks to change is done.
    """
    title: str
    scheduled_date: DateKey
    done: bool = False
    source_file: str = ""
    priority: int = 0  # higher sorts first
    reminder_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Accept plain strings for dates (as stored in SQLite)."""
        if isinstance(self.scheduled_date, str):
            self.scheduled_date = DateKey.parse(self.scheduled_date)
        if isinstance(self.created_at, str):
            self.created_at = datetime.fromisoformat(self.created_at)

    def key(self) -> str:
        """Stable unique identifier embedded in rendered checklist lines."""
        return self.reminder_id

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "reminder_id": self.reminder_id,
            "title": self.title,
            "done": self.done,
            "source_file": self.source_file,
            "scheduled_date": str(self.scheduled_date),
            "priority": self.priority,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Document:
    """A Markdown note in the vault."""
    path: Path
    mtime: float = 0.0

    @property
    def name(self) -> str:
        """File name including extension, e.g. 2024-01-05.md."""
        return self.path.name

    @property
    def basename(self) -> str:
        """File name without extension, e.g. 2024-01-05."""
        return self.path.stem

    @classmethod
    def from_path(cls, path: Path) -> "Document":
        path = Path(path)
        return cls(path=path, mtime=path.stat().st_mtime)
