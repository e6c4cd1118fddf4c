"""
Daily Note ↔ Reminders Sync

Keeps a marked checklist section of a Markdown daily note in sync with
the reminders scheduled for that day, in both directions.
"""

from .models import DateKey, Reminder, Document
from .checklist import ParsedLine
from .section import MarkersNotFound, SectionMarkers
from .notifications import Notice
from .reminder_store import ReminderStore
from .vault import Vault
from .sync_engine import SyncEngine, SyncOutcome

__all__ = [
    "DateKey",
    "Reminder",
    "Document",
    "ParsedLine",
    "MarkersNotFound",
    "SectionMarkers",
    "Notice",
    "ReminderStore",
    "Vault",
    "SyncEngine",
    "SyncOutcome",
]

__version__ = "0.1.0"
