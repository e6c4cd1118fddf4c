"""
Notes Vault

File-system document store for Markdown notes. Reads and writes run in a
worker thread so the async sync engine only suspends at I/O boundaries.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from .models import Document
from . import config

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class Vault:
    """
    A directory tree of Markdown notes.
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize the vault.

        Args:
            root: Notes directory (env: NOTES_DIR)
        """
        self.root = Path(root or config.NOTES_DIR)
        self._verify_root()

    def _verify_root(self):
        """Verify the notes directory exists."""
        if not self.root.is_dir():
            raise FileNotFoundError(
                f"Notes directory not found at {self.root}. "
                "Create it or set NOTES_DIR environment variable."
            )

    def enumerate_candidate_documents(self) -> list[Document]:
        """All Markdown notes under the root, sorted by relative path."""
        paths = sorted(
            (p for p in self.root.rglob(f"*{NOTE_SUFFIX}") if p.is_file()),
            key=lambda p: p.relative_to(self.root).as_posix(),
        )
        return [Document.from_path(p) for p in paths]

    def document_for(self, path: Path) -> Document:
        """Build a Document handle for a path (relative paths resolve against the root)."""
        path = Path(path)
        if not path.is_absolute() and not path.exists():
            path = self.root / path
        return Document.from_path(path)

    async def read(self, document: Document) -> str:
        return await asyncio.to_thread(self._read_text, document.path)

    async def write(self, document: Document, text: str) -> None:
        await asyncio.to_thread(self._write_text, document.path, text)
        logger.debug(f"Wrote {len(text)} chars to {document.path}")

    @staticmethod
    def _read_text(path: Path) -> str:
        # newline="" keeps \r\n intact so untouched content stays byte-identical
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
