"""
Tests for the file-system vault, and the engine running against it end to end.
"""

import os
from datetime import date

import pytest

from daily_note_sync.config import Settings
from daily_note_sync.models import DateKey
from daily_note_sync.reminder_store import ReminderStore
from daily_note_sync.sync_engine import SyncEngine, SyncOutcome
from daily_note_sync.vault import Vault


DAY = DateKey(date(2024, 1, 5))
START = "<!-- start of todos -->"
END = "<!-- end of todos -->"


@pytest.fixture
def notes_dir(tmp_path):
    root = tmp_path / "notes"
    (root / "daily").mkdir(parents=True)
    return root


class TestVault:

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Vault(tmp_path / "nope")

    def test_enumerates_markdown_recursively(self, notes_dir):
        (notes_dir / "daily" / "2024-01-05.md").write_text("x")
        (notes_dir / "inbox.md").write_text("y")
        (notes_dir / "image.png").write_bytes(b"")

        names = [d.name for d in Vault(notes_dir).enumerate_candidate_documents()]
        assert sorted(names) == ["2024-01-05.md", "inbox.md"]

    def test_document_for_relative_path(self, notes_dir):
        (notes_dir / "daily" / "2024-01-05.md").write_text("x")
        doc = Vault(notes_dir).document_for("daily/2024-01-05.md")
        assert doc.path == notes_dir / "daily" / "2024-01-05.md"

    @pytest.mark.asyncio
    async def test_read_write_preserves_line_endings(self, notes_dir):
        path = notes_dir / "daily" / "2024-01-05.md"
        path.write_bytes(b"line one\r\nline two\n")
        vault = Vault(notes_dir)
        doc = vault.document_for(path)

        text = await vault.read(doc)
        assert text == "line one\r\nline two\n"

        await vault.write(doc, text + "three\r\n")
        assert path.read_bytes() == b"line one\r\nline two\nthree\r\n"


class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_render_then_check_then_rerender(self, tmp_path, notes_dir, notifier):
        note = notes_dir / "daily" / "2024-01-05.md"
        note.write_text(f"# Friday\n{START}\n{END}\nbye\n", encoding="utf-8")
        older = notes_dir / "old-2024-01-05-backup.md"
        older.write_text(f"{START}\n{END}\n", encoding="utf-8")
        os.utime(older, (1, 1))

        store = ReminderStore(db_path=tmp_path / "reminders.db")
        milk = store.add("Buy milk", DAY, source_file="groceries.md")
        vault = Vault(notes_dir)
        engine = SyncEngine(
            vault, store, store.update_reminder_done,
            notifier=notifier,
            settings=Settings(auto_embed_enabled=True, section_marker_label="todos"),
        )

        assert await engine.render_to_document(date=DAY) == SyncOutcome.UPDATED
        line = f"- [ ] Buy milk [[groceries.md|source]] <!-- reminder-key: {milk.key()} -->"
        assert note.read_text(encoding="utf-8") == f"# Friday\n{START}\n{line}\n{END}\nbye\n"
        assert older.read_text(encoding="utf-8") == f"{START}\n{END}\n"

        note.write_text(note.read_text(encoding="utf-8").replace("- [ ]", "- [x]"), encoding="utf-8")
        outcome = await engine.on_document_modified(vault.document_for(note))

        assert outcome == SyncOutcome.RECONCILED
        assert store.get(milk.key()).done is True
        assert await engine.render_to_document(date=DAY) == SyncOutcome.UP_TO_DATE
