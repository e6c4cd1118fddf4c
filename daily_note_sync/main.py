#!/usr/bin/env python3
"""
Daily Note ↔ Reminders Sync CLI

Main command-line interface for the sync tool.
"""

import argparse
import asyncio
import sqlite3
import sys
from pathlib import Path

from .models import DateKey
from .reminder_store import ReminderStore
from .sync_engine import SyncEngine, SyncOutcome
from .vault import Vault
from . import config


def _parse_date(value: str) -> DateKey:
    try:
        return DateKey.parse(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _build_engine() -> tuple[SyncEngine, Vault, ReminderStore]:
    vault = Vault()
    store = ReminderStore()
    engine = SyncEngine(vault, store, store.update_reminder_done)
    return engine, vault, store


def cmd_init(args):
    """Initialize the sync system."""
    print("\n=== Initializing Daily Note Sync ===\n")

    store = ReminderStore()
    print(f"✓ Created reminder database at: {store.db_path}")

    if config.NOTES_DIR.is_dir():
        print(f"✓ Notes directory: {config.NOTES_DIR}")
    else:
        print(f"✗ Notes directory not found: {config.NOTES_DIR}")
        print("  Set NOTES_DIR to the folder holding your daily notes.")
        return 1

    label = config.DAILY_NOTE_SECTION_MARKER
    print("\nAdd these lines to a daily note (e.g. 2024-01-05.md):")
    print(f"  <!-- start of {label} -->")
    print(f"  <!-- end of {label} -->")
    return 0


def cmd_update(args):
    """Render reminders into the daily note."""
    engine, _, _ = _build_engine()
    outcome = asyncio.run(engine.render_to_document(quiet=args.quiet, date=args.date))
    if outcome == SyncOutcome.DISABLED:
        print("Daily note embedding is disabled (DAILY_NOTE_AUTO_EMBED=false).")
    return 1 if outcome == SyncOutcome.FAILED else 0


def cmd_reconcile(args):
    """Sync checkbox changes in a note back to reminders."""
    engine, vault, _ = _build_engine()
    document = vault.document_for(Path(args.path))
    outcome = asyncio.run(engine.on_document_modified(document))
    print(f"Reconcile {document.name}: {outcome.value}")
    return 1 if outcome == SyncOutcome.FAILED else 0


def cmd_add(args):
    """Add a reminder."""
    store = ReminderStore()
    reminder = store.add(
        args.title,
        args.date or DateKey.now(),
        source_file=args.source,
        priority=args.priority,
    )
    print(f"✓ Added '{reminder.title}' for {reminder.scheduled_date} ({reminder.key()})")
    return 0


def cmd_list(args):
    """List reminders."""
    store = ReminderStore()
    reminders = store.by_date(args.date) if args.date else store.all_reminders
    if not reminders:
        print("No reminders found.")
        return 0
    for reminder in reminders:
        check = "x" if reminder.done else " "
        print(f"  [{check}] {reminder.scheduled_date}  {reminder.title}  ({reminder.key()})")
    return 0


def cmd_set_done(args):
    """Mark a reminder done or not done."""
    store = ReminderStore()
    reminder = store.get(args.reminder_id)
    if reminder is None:
        print(f"Error: Reminder not found: {args.reminder_id}")
        return 1
    asyncio.run(store.update_reminder_done(reminder, args.command == "done"))
    return 0


def cmd_status(args):
    """Show sync status."""
    store = ReminderStore()
    stats = store.get_stats()

    print("\n=== Sync Status ===\n")
    for key, value in stats.items():
        print(f"  {key}: {value}")

    logs = store.get_recent_logs(limit=10)
    if logs:
        print("\nRecent Activity:")
        for log in logs:
            print(f"  [{log['timestamp']}] {log['action']} {log['reminder_id'] or ''}")

    return 0


def cmd_config(args):
    """Show current configuration."""
    config.print_config()
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Daily Note ↔ Reminders Sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Initialize the sync system
  python -m daily_note_sync.main init

  # Add a reminder for a day
  python -m daily_note_sync.main add "Buy milk" --date 2024-01-05 --source groceries.md

  # Render today's reminders into today's daily note
  python -m daily_note_sync.main update

  # Push checkbox changes in a note back to the reminders
  python -m daily_note_sync.main reconcile notes/2024-01-05.md
"""
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    subparsers.add_parser("init", help="Initialize the sync system")

    # update command
    update_parser = subparsers.add_parser("update", help="Render reminders into the daily note")
    update_parser.add_argument("--date", "-d", type=_parse_date, help="Date (YYYY-MM-DD), default today")
    update_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log, don't print notices"
    )

    # reconcile command
    reconcile_parser = subparsers.add_parser("reconcile", help="Sync a modified note back to reminders")
    reconcile_parser.add_argument("path", help="Path to the note")

    # add command
    add_parser = subparsers.add_parser("add", help="Add a reminder")
    add_parser.add_argument("title", help="Reminder title")
    add_parser.add_argument("--date", "-d", type=_parse_date, help="Date (YYYY-MM-DD), default today")
    add_parser.add_argument("--source", "-s", default="", help="Source note of the reminder")
    add_parser.add_argument("--priority", "-p", type=int, default=0, help="Higher sorts first")

    # list command
    list_parser = subparsers.add_parser("list", help="List reminders")
    list_parser.add_argument("--date", "-d", type=_parse_date, help="Only this date (YYYY-MM-DD)")

    # done / undone commands
    for name in ("done", "undone"):
        done_parser = subparsers.add_parser(name, help=f"Mark a reminder {name.replace('un', 'not ')}")
        done_parser.add_argument("reminder_id", help="Reminder key")

    # status command
    subparsers.add_parser("status", help="Show sync status")

    # config command
    subparsers.add_parser("config", help="Show current configuration")

    args = parser.parse_args()

    # Dispatch to command handler
    commands = {
        "init": cmd_init,
        "update": cmd_update,
        "reconcile": cmd_reconcile,
        "add": cmd_add,
        "list": cmd_list,
        "done": cmd_set_done,
        "undone": cmd_set_done,
        "status": cmd_status,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if not handler:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(handler(args))
    except (OSError, KeyError, sqlite3.Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
