"""
Marked Section Rewriter

Splices text into a region of a document delimited by two literal marker
lines. Knows nothing about reminders; everything outside the markers is
preserved byte-for-byte.
"""

from dataclasses import dataclass
from typing import Optional


class MarkersNotFound(ValueError):
    """Raised when a document lacks the start or end marker."""

    def __init__(self, start_marker: str, end_marker: str, start_index: int, end_index: int):
        self.start_marker = start_marker
        self.end_marker = end_marker
        self.start_index = start_index
        self.end_index = end_index
        super().__init__(
            f"Markers not found (start={start_index}, end={end_index}): "
            f"{start_marker!r} / {end_marker!r}"
        )


@dataclass(frozen=True)
class SectionMarkers:
    """A start/end marker pair."""
    start: str
    end: str

    @classmethod
    def from_label(cls, label: str) -> "SectionMarkers":
        """Build the HTML-comment markers used in notes."""
        return cls(
            start=f"<!-- start of {label} -->",
            end=f"<!-- end of {label} -->",
        )


def _locate(document: str, start_marker: str, end_marker: str) -> tuple[int, int]:
    start_index = document.find(start_marker)
    end_index = document.find(end_marker)
    # an end marker ahead of the start marker delimits nothing
    if start_index == -1 or end_index == -1 or end_index < start_index + len(start_marker):
        raise MarkersNotFound(start_marker, end_marker, start_index, end_index)
    return start_index, end_index


def replace_section(document: str, start_marker: str, end_marker: str, new_inner_text: str) -> str:
    """
    Replace everything from the start marker through the end marker.

    The new section is always "start\\n<new_inner_text>\\nend", regardless of
    how the old section was spaced. The first occurrence of each marker is
    used, each searched independently.

    Raises:
        MarkersNotFound: if either marker is missing, or the end marker
            comes before the start marker
    """
    start_index, end_index = _locate(document, start_marker, end_marker)
    new_section = f"{start_marker}\n{new_inner_text}\n{end_marker}"
    return document[:start_index] + new_section + document[end_index + len(end_marker):]


def extract_section(document: str, start_marker: str, end_marker: str) -> Optional[str]:
    """Return the text strictly between the markers, or None if not present."""
    try:
        start_index, end_index = _locate(document, start_marker, end_marker)
    except MarkersNotFound:
        return None
    return document[start_index + len(start_marker):end_index]
