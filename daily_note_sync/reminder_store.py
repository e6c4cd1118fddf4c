"""
Reminder Store

Maintains a SQLite database of reminders indexed by scheduled date, plus
an audit log of changes pushed back from daily notes.
"""

import asyncio
import sqlite3
from pathlib import Path
from datetime import datetime
from typing import Optional
import json
import logging

from .models import DateKey, Reminder
from . import config

logger = logging.getLogger(__name__)


class ReminderStore:
    """
    Manages reminders in a SQLite database.

    Schema:
    - reminders: one row per reminder, keyed by reminder_id
    - sync_log: Audit log of all sync operations
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the reminder database.

        Args:
            db_path: Path to the SQLite database (env: REMINDERS_DB)
        """
        if db_path is None:
            db_path = config.REMINDERS_DB

        self.db_path = Path(db_path)
        self._init_db()

    def _init_db(self):
        """Create database tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS reminders (
                    reminder_id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    done INTEGER NOT NULL DEFAULT 0,
                    source_file TEXT DEFAULT '',
                    scheduled_date TEXT NOT NULL,
                    priority INTEGER DEFAULT 0,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS sync_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp INTEGER NOT NULL,
                    action TEXT NOT NULL,
                    reminder_id TEXT,
                    details TEXT
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_scheduled_date
                ON reminders(scheduled_date)
            """)

            conn.commit()

    @staticmethod
    def _row_to_reminder(row: sqlite3.Row) -> Reminder:
        return Reminder(
            reminder_id=row["reminder_id"],
            title=row["title"],
            done=bool(row["done"]),
            source_file=row["source_file"] or "",
            scheduled_date=row["scheduled_date"],
            priority=row["priority"] or 0,
            created_at=row["created_at"],
        )

    @property
    def all_reminders(self) -> list[Reminder]:
        """Every reminder, in collection order."""
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute("""
                SELECT * FROM reminders
                ORDER BY scheduled_date, priority DESC, created_at, reminder_id
            """)
            return [self._row_to_reminder(row) for row in cursor]

    def by_date(self, date_key: DateKey) -> list[Reminder]:
        """
        Reminders scheduled for a date.

        Order is deterministic (priority, then creation order) so rendering
        the same set twice produces identical text.
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute("""
                SELECT * FROM reminders
                WHERE scheduled_date = ?
                ORDER BY priority DESC, created_at, reminder_id
            """, (str(date_key),))
            return [self._row_to_reminder(row) for row in cursor]

    def get(self, reminder_id: str) -> Optional[Reminder]:
        """Get a reminder by ID."""
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM reminders WHERE reminder_id = ?",
                (reminder_id,)
            ).fetchone()
            if row:
                return self._row_to_reminder(row)
        return None

    def add(
        self,
        title: str,
        scheduled_date: DateKey,
        source_file: str = "",
        priority: int = 0,
        done: bool = False,
    ) -> Reminder:
        """Create a reminder and return it."""
        reminder = Reminder(
            title=title,
            scheduled_date=scheduled_date,
            done=done,
            source_file=source_file,
            priority=priority,
            created_at=datetime.now(),
        )
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                INSERT INTO reminders
                (reminder_id, title, done, source_file, scheduled_date, priority, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                reminder.reminder_id,
                reminder.title,
                int(reminder.done),
                reminder.source_file,
                str(reminder.scheduled_date),
                reminder.priority,
                reminder.created_at.isoformat(),
            ))
            conn.commit()
        self.log_action("add", reminder.reminder_id, {"title": title, "date": str(scheduled_date)})
        return reminder

    def delete(self, reminder_id: str):
        """Delete a reminder."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "DELETE FROM reminders WHERE reminder_id = ?",
                (reminder_id,)
            )
            conn.commit()
        self.log_action("delete", reminder_id)

    def set_done(self, reminder_id: str, done: bool):
        """
        Persist the completion state of a reminder.

        Raises:
            KeyError: if no reminder has this ID
        """
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "UPDATE reminders SET done = ? WHERE reminder_id = ?",
                (int(done), reminder_id)
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise KeyError(f"Unknown reminder: {reminder_id}")

    async def update_reminder_done(self, reminder: Reminder, checked: bool) -> None:
        """
        Update sink used by the sync engine for checkbox toggles in a note.

        Only the done field changes. Database calls run in a worker thread.
        """
        await asyncio.to_thread(self.set_done, reminder.reminder_id, checked)
        reminder.done = checked
        await asyncio.to_thread(
            self.log_action,
            "complete" if checked else "uncomplete",
            reminder.reminder_id,
            {"title": reminder.title, "date": str(reminder.scheduled_date)},
        )
        logger.info(f"Reminder '{reminder.title}' marked {'done' if checked else 'not done'}")

    def log_action(self, action: str, reminder_id: Optional[str] = None, details: Optional[dict] = None):
        """Log a sync action for auditing."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                INSERT INTO sync_log (timestamp, action, reminder_id, details)
                VALUES (?, ?, ?, ?)
            """, (
                int(datetime.now().timestamp()),
                action,
                reminder_id,
                json.dumps(details) if details else None,
            ))
            conn.commit()

    def get_recent_logs(self, limit: int = 100) -> list[dict]:
        """Get recent sync log entries."""
        logs = []
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                "SELECT * FROM sync_log ORDER BY timestamp DESC, id DESC LIMIT ?",
                (limit,)
            )
            for row in cursor:
                logs.append({
                    "id": row["id"],
                    "timestamp": datetime.fromtimestamp(row["timestamp"]),
                    "action": row["action"],
                    "reminder_id": row["reminder_id"],
                    "details": json.loads(row["details"]) if row["details"] else None,
                })
        return logs

    def get_stats(self) -> dict:
        """Get reminder statistics."""
        with sqlite3.connect(self.db_path) as conn:
            total = conn.execute("SELECT COUNT(*) FROM reminders").fetchone()[0]
            done = conn.execute("SELECT COUNT(*) FROM reminders WHERE done = 1").fetchone()[0]
            dates = conn.execute("SELECT COUNT(DISTINCT scheduled_date) FROM reminders").fetchone()[0]

            return {
                "total_reminders": total,
                "done": done,
                "open": total - done,
                "scheduled_dates": dates,
            }
