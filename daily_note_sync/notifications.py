"""
User-facing notices emitted by the sync engine.
"""

from enum import Enum
from typing import Protocol


class Notice(str, Enum):
    """The terminal outcomes a user can be told about."""
    DOCUMENT_NOT_FOUND = "document_not_found"
    MARKERS_NOT_FOUND = "markers_not_found"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    FAILED = "failed"


MESSAGES = {
    Notice.DOCUMENT_NOT_FOUND: "Daily note not found ({date})",
    Notice.MARKERS_NOT_FOUND: "Section marker not found: {marker}",
    Notice.UPDATED: "Daily note reminders updated ({date})",
    Notice.UP_TO_DATE: "Daily note is already up to date",
    Notice.FAILED: "Failed to update daily note, see the log for details",
}


def format_notice(notice: Notice, **context) -> str:
    """Build the human-readable message for a notice."""
    return MESSAGES[notice].format(**context)


class Notifier(Protocol):
    def notify(self, notice: Notice, message: str) -> None:
        ...


class ConsoleNotifier:
    """Prints notices to stdout."""

    def notify(self, notice: Notice, message: str) -> None:
        prefix = "✗" if notice in (Notice.FAILED, Notice.DOCUMENT_NOT_FOUND, Notice.MARKERS_NOT_FOUND) else "✓"
        print(f"  {prefix} {message}")

