"""Download filename for an exported list."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bookmark_export.text import format_timestamp

if TYPE_CHECKING:
    from datetime import datetime

# Characters that are unsafe in filenames on at least one common platform
_UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|]')


def sanitize_list_name(name: str) -> str:
    """Replace each of ``/ \\ : * ? " < > |`` with ``-``.

    Nothing else is touched, so spaces and other punctuation survive.

    >>> sanitize_list_name('Q&A: "Best" <2024>')
    'Q&A- -Best- -2024-'
    """
    return _UNSAFE_CHARS.sub("-", name)


def export_filename(list_name: str, exported_at: datetime) -> str:
    """Return ``list-<sanitized name>-<ISO timestamp>.csv``.

    The timestamp keeps its colons; only the list name is sanitized.
    """
    return f"list-{sanitize_list_name(list_name)}-{format_timestamp(exported_at)}.csv"
