"""CSV export."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from bookmark_export.sources.base import AssetContent, LinkContent, TextContent, UnknownContent
from bookmark_export.text import format_timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from bookmark_export.sources.base import BookmarkRecord

# Column order is fixed; consumers of existing exports rely on it.
CSV_COLUMNS = [
    "id",
    "title",
    "url",
    "description",
    "note",
    "summary",
    "tags",
    "author",
    "publisher",
    "datePublished",
    "dateModified",
    "createdAt",
    "modifiedAt",
    "archived",
    "favourited",
    "type",
    "source",
    "crawlStatus",
    "favicon",
    "imageUrl",
]

# Tags are joined with a pipe so a tag list never splits into extra columns
TAG_SEPARATOR = "|"

_NEEDS_QUOTING = (",", '"', "\n")


def escape_field(value: object) -> str:
    """Render one field: quoted only if it contains a comma, quote, or newline.

    ``None`` becomes the empty string, booleans become ``true``/``false``,
    everything else goes through ``str()``.  Embedded quotes are doubled.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def bookmark_row(record: BookmarkRecord) -> list[str]:
    """Map one bookmark to its 20 unescaped column values."""
    url = description = author = publisher = ""
    date_published = date_modified = favicon = image_url = ""

    content = record.content
    match content:
        case LinkContent():
            url = content.url or ""
            description = content.description or ""
            author = content.author or ""
            publisher = content.publisher or ""
            date_published = _timestamp_or_empty(content.date_published)
            date_modified = _timestamp_or_empty(content.date_modified)
            favicon = content.favicon or ""
            image_url = content.image_url or ""
        case TextContent() | AssetContent() | UnknownContent():
            pass
        case _:
            assert_never(content)

    return [
        record.id,
        record.title or "",
        url,
        description,
        record.note or "",
        record.summary or "",
        TAG_SEPARATOR.join(tag.name for tag in record.tags),
        author,
        publisher,
        date_published,
        date_modified,
        format_timestamp(record.created_at),
        _timestamp_or_empty(record.modified_at),
        "true" if record.archived else "false",
        "true" if record.favourited else "false",
        str(content.kind),
        record.source or "",
        "",  # crawlStatus is reserved and always empty
        favicon,
        image_url,
    ]


class CsvSerializer:
    """Renders bookmark records as CSV text suitable for spreadsheet import.

    Pure and deterministic: no I/O, and the same input always produces
    the same text.
    """

    def serialize(self, records: Sequence[BookmarkRecord]) -> str:
        """Return the header row plus one row per record, joined by ``\\n``.

        An empty sequence yields only the header.  There is no trailing
        newline.
        """
        rows = [CSV_COLUMNS, *(bookmark_row(record) for record in records)]
        return "\n".join(",".join(escape_field(value) for value in row) for row in rows)


def _timestamp_or_empty(value: datetime | None) -> str:
    return format_timestamp(value) if value is not None else ""
