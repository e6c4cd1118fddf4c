"""
Configuration Management

Centralizes all configurable settings with environment variable overrides.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .section import SectionMarkers

# Load .env file if present
load_dotenv(Path(__file__).parent.parent / ".env")


def _get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get environment variable with optional default."""
    value = os.environ.get(key, default)
    if required and not value:
        raise ValueError(
            f"Required environment variable {key} is not set. "
            f"Set it with: export {key}='your-value'"
        )
    return value


def get_bool_env(key: str, default: bool) -> bool:
    """Get a boolean environment variable ("true"/"1"/"yes" are truthy)."""
    value = get_env(key, "true" if default else "false")
    return value.strip().lower() in ("true", "1", "yes", "on")


# =============================================================================
# Data Paths
# =============================================================================

# Project root for relative paths
PROJECT_ROOT = _get_project_root()

# Root directory of the Markdown notes (daily notes live somewhere below it)
NOTES_DIR = Path(
    os.path.expanduser(get_env("NOTES_DIR", str(PROJECT_ROOT / "notes")))
)

# Reminder database path
REMINDERS_DB = Path(
    get_env("REMINDERS_DB", str(PROJECT_ROOT / "reminders.db"))
)

LOG_LEVEL = get_env("LOG_LEVEL", "INFO").strip().upper()


# =============================================================================
# Daily Note Configuration
# =============================================================================

# Whether reminders are embedded into the daily note at all
DAILY_NOTE_AUTO_EMBED = get_bool_env("DAILY_NOTE_AUTO_EMBED", True)

# Label used to build the <!-- start of LABEL --> / <!-- end of LABEL --> markers
DAILY_NOTE_SECTION_MARKER = get_env("DAILY_NOTE_SECTION_MARKER", "todos")


@dataclass
class Settings:
    """
    Runtime settings consumed by the sync engine.

    The engine reads these on every call, so flipping a field on a shared
    instance takes effect on the next update.
    """
    auto_embed_enabled: bool = True
    section_marker_label: str = "todos"

    @property
    def markers(self) -> SectionMarkers:
        return SectionMarkers.from_label(self.section_marker_label)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the module-level environment configuration."""
        return cls(
            auto_embed_enabled=DAILY_NOTE_AUTO_EMBED,
            section_marker_label=DAILY_NOTE_SECTION_MARKER,
        )


# =============================================================================
# Helper to print current configuration
# =============================================================================

def print_config():
    """Print current configuration (for debugging)."""
    print("Current Configuration:")
    print(f"  NOTES_DIR: {NOTES_DIR}")
    print(f"  REMINDERS_DB: {REMINDERS_DB}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  DAILY_NOTE_AUTO_EMBED: {DAILY_NOTE_AUTO_EMBED}")
    print(f"  DAILY_NOTE_SECTION_MARKER: {DAILY_NOTE_SECTION_MARKER}")
