"""
Sync Engine

Bidirectional sync between the reminder collection and the marked checklist
section of a daily note, with a re-entrancy guard so the engine's own writes
don't trigger another round of sync.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol
import logging

from . import checklist
from . import config
from .config import Settings
from .locator import date_of, find_for_date
from .models import DateKey, Document, Reminder
from .notifications import ConsoleNotifier, Notice, Notifier, format_notice
from .section import MarkersNotFound, extract_section, replace_section


# Configure logging (unknown level names fall back to INFO)
_log_level = logging.getLevelName(config.LOG_LEVEL)
logging.basicConfig(
    level=_log_level if isinstance(_log_level, int) else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def enumerate_candidate_documents(self) -> list[Document]: ...

    async def read(self, document: Document) -> str: ...

    async def write(self, document: Document, text: str) -> None: ...


class ReminderCollection(Protocol):
    @property
    def all_reminders(self) -> list[Reminder]: ...

    def by_date(self, date_key: DateKey) -> list[Reminder]: ...


UpdateReminderDone = Callable[[Reminder, bool], Awaitable[None]]


class SyncOutcome(str, Enum):
    """How a sync call ended."""
    DISABLED = "disabled"
    IN_PROGRESS = "in_progress"
    NOT_DAILY_NOTE = "not_daily_note"
    DOCUMENT_NOT_FOUND = "document_not_found"
    MARKERS_NOT_FOUND = "markers_not_found"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    RECONCILED = "reconciled"
    FAILED = "failed"


class SyncEngine:
    """
    Keeps the reminder section of daily notes in sync with reminders.

    Key features:
    - Outbound render of a date's reminders into the marked section
    - Inbound reconciliation of checkbox toggles back to reminders
    - Healing re-render when a note edit toggled nothing
    - At most one render in flight; triggers during a render are dropped
    """

    def __init__(
        self,
        vault: DocumentStore,
        reminders: ReminderCollection,
        update_reminder: UpdateReminderDone,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the sync engine.

        Args:
            vault: Document store holding the notes
            reminders: Collection queried for reminders by date
            update_reminder: Async callback persisting a reminder's done state
            notifier: Receives user-facing notices (ConsoleNotifier if None)
            settings: Feature toggle and marker label (from env if None)
        """
        self.vault = vault
        self.reminders = reminders
        self.update_reminder = update_reminder
        self.notifier = notifier or ConsoleNotifier()
        self.settings = settings or Settings.from_env()
        self._updating = False

    @property
    def updating(self) -> bool:
        return self._updating

    @contextmanager
    def _update_in_flight(self):
        """Hold the re-entrancy guard for the duration of a render."""
        self._updating = True
        try:
            yield
        finally:
            self._updating = False

    def _report(self, quiet: bool, notice: Notice, **context):
        message = format_notice(notice, **context)
        logger.info(message)
        if not quiet:
            self.notifier.notify(notice, message)

    async def render_to_document(self, quiet: bool = True, date: Optional[DateKey] = None) -> SyncOutcome:
        """
        Render the reminders for a date into its daily note.

        Never raises: failures are logged and reported as a notice
        (suppressed when quiet).

        Args:
            quiet: Don't surface notices, only log
            date: Target date (today if None)

        Returns:
            SyncOutcome describing how the render ended
        """
        if not self.settings.auto_embed_enabled or self._updating:
            logger.debug("Skipping daily note render (disabled or already updating)")
            return SyncOutcome.DISABLED if not self.settings.auto_embed_enabled else SyncOutcome.IN_PROGRESS

        target_date = date or DateKey.now()
        markers = self.settings.markers

        with self._update_in_flight():
            try:
                document = find_for_date(target_date, self.vault.enumerate_candidate_documents())
                if document is None:
                    self._report(quiet, Notice.DOCUMENT_NOT_FOUND, date=target_date)
                    return SyncOutcome.DOCUMENT_NOT_FOUND

                logger.info(f"Total reminders in system: {len(self.reminders.all_reminders)}")
                reminders = self.reminders.by_date(target_date)
                logger.info(f"Filtered reminders for {target_date}: {len(reminders)}")

                content = await self.vault.read(document)
                logger.info(f"Searching for markers: {markers.start!r} and {markers.end!r}")
                try:
                    new_content = replace_section(
                        content, markers.start, markers.end, checklist.render_all(reminders)
                    )
                except MarkersNotFound as e:
                    logger.warning(f"{document.name}: {e}")
                    self._report(quiet, Notice.MARKERS_NOT_FOUND, marker=markers.start)
                    return SyncOutcome.MARKERS_NOT_FOUND

                if new_content == content:
                    self._report(quiet, Notice.UP_TO_DATE)
                    return SyncOutcome.UP_TO_DATE

                logger.info(f"Updating daily note content for {target_date}...")
                await self.vault.write(document, new_content)
                self._report(quiet, Notice.UPDATED, date=target_date)
                return SyncOutcome.UPDATED

            except Exception:
                logger.exception("Failed to update daily note")
                self._report(quiet, Notice.FAILED)
                return SyncOutcome.FAILED

    async def on_document_modified(self, document: Document) -> SyncOutcome:
        """
        Push checkbox toggles in a daily note back to the reminders.

        Lines are matched to reminders by their embedded key, or by
        "line starts with the reminder title" when they carry none. If no
        reminder changed, the section is re-rendered quietly to pick up
        reminders added or removed since the last render. Lines that match
        nothing are left alone until that re-render replaces them.

        Read and update failures propagate to the caller.
        """
        if self._updating or not self.settings.auto_embed_enabled:
            return SyncOutcome.IN_PROGRESS if self._updating else SyncOutcome.DISABLED

        file_date = date_of(document)
        if file_date is None:
            return SyncOutcome.NOT_DAILY_NOTE

        logger.debug(f"Daily note modified, checking for sync... {document.path} {file_date}")
        content = await self.vault.read(document)
        markers = self.settings.markers
        section = extract_section(content, markers.start, markers.end)
        if section is None:
            return SyncOutcome.MARKERS_NOT_FOUND

        reminders = self.reminders.by_date(file_date)

        changed = False
        for line in section.split("\n"):
            parsed = checklist.parse(line)
            if parsed is None:
                continue
            reminder = checklist.find_reminder(parsed, reminders)
            if reminder is not None and reminder.done != parsed.checked:
                logger.debug(f"Syncing checkbox state back to source: {reminder.title} {parsed.checked}")
                await self.update_reminder(reminder, parsed.checked)
                changed = True

        if not changed:
            return await self.render_to_document(quiet=True, date=file_date)
        return SyncOutcome.RECONCILED
