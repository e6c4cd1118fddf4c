"""
Daily Note Locator

Finds the note for a date by filename convention.
"""

from typing import Iterable, Optional

from .models import DateKey, Document


def find_for_date(date_key: DateKey, candidates: Iterable[Document]) -> Optional[Document]:
    """
    Pick the daily note for a date.

    Matching strategy:
    1. Exact match: basename is YYYY-MM-DD (the usual daily note convention)
    2. Loose match: file name contains YYYY-MM-DD (prefixed/suffixed names)

    When several files match at the chosen level, the most recently modified
    one wins; ties go to the first in input order.
    """
    date_str = date_key.to_canonical_string()
    candidates = list(candidates)

    matching = [d for d in candidates if d.basename == date_str]
    if not matching:
        matching = [d for d in candidates if date_str in d.name]
    if not matching:
        return None

    best = matching[0]
    for document in matching[1:]:
        if document.mtime > best.mtime:
            best = document
    return best


def date_of(document: Document) -> Optional[DateKey]:
    """Date a note belongs to, taken from its file name."""
    return DateKey.from_text(document.name)
