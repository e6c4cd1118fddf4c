"""
Checklist Line Codec

Renders reminders as Markdown checklist lines and parses them back.

Rendered format (the identifier comment must survive user edits verbatim):

    - [ ] Buy milk [[groceries.md|source]] <!-- reminder-key: abc123 -->
"""

from dataclasses import dataclass
from typing import Optional
import re

from .models import Reminder

# Generic Markdown task grammar: bullet, checkbox, body
CHECKLIST_PATTERN = re.compile(r"^\s*[-*+] \[(?P<mark>[ xX])\] ?(?P<body>.*)$")

REMINDER_KEY_PATTERN = re.compile(r"<!-- reminder-key: (.*?) -->")


@dataclass(frozen=True)
class ParsedLine:
    """A checklist line split into its checked state and body text."""
    checked: bool
    body_text: str

    @property
    def key(self) -> Optional[str]:
        """The embedded reminder key, if the line carries one."""
        match = REMINDER_KEY_PATTERN.search(self.body_text)
        if match:
            return match.group(1)
        return None


def render(reminder: Reminder) -> str:
    """Render a reminder as a single checklist line."""
    check = "x" if reminder.done else " "
    return (
        f"- [{check}] {reminder.title} [[{reminder.source_file}|source]] "
        f"<!-- reminder-key: {reminder.key()} -->"
    )


def render_all(reminders: list[Reminder]) -> str:
    """Render reminders one per line, in the given order."""
    return "\n".join(render(r) for r in reminders)


def parse(line: str) -> Optional[ParsedLine]:
    """Parse a checklist line; returns None for anything else."""
    match = CHECKLIST_PATTERN.match(line.strip())
    if not match:
        return None
    return ParsedLine(
        checked=match.group("mark").lower() == "x",
        body_text=match.group("body"),
    )


def matches(parsed: ParsedLine, reminder: Reminder) -> bool:
    """
    Check whether a parsed line refers to the reminder.

    Lines with an embedded key only match by key. Lines without one fall back
    to "body starts with the reminder title", which is ambiguous when titles
    share a prefix; callers take the first match in collection order.
    """
    key = parsed.key
    if key:
        return reminder.key() == key
    return parsed.body_text.startswith(reminder.title)


def find_reminder(parsed: ParsedLine, reminders: list[Reminder]) -> Optional[Reminder]:
    """Return the first reminder the line refers to, or None."""
    for reminder in reminders:
        if matches(parsed, reminder):
            return reminder
    return None
