"""List exporter — orchestrates list lookup → collection → CSV.

The ListExporter is the top-level entry point of the export core:

1. Resolve the list summary (fails fast on a missing or forbidden list)
2. Collect every bookmark in the list via the paginated source
3. Serialize the records to CSV text
4. Derive the download filename from the list name and export time

Any failure aborts the export and propagates unchanged, so a partial
CSV is never produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from bookmark_export.config import MAX_BOOKMARKS_PER_PAGE
from bookmark_export.export.collector import BookmarkCollector
from bookmark_export.export.csv_export import CsvSerializer
from bookmark_export.export.naming import export_filename
from bookmark_export.logging import list_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bookmark_export.sources.base import BookmarkSource, ListSummary

CSV_CONTENT_TYPE = "text/csv"


@dataclass(frozen=True)
class ExportResult:
    """A finished export, ready to be written to disk or sent as a download."""

    filename: str
    csv_text: str
    list_summary: ListSummary
    bookmark_count: int

    @property
    def content_type(self) -> str:
        return CSV_CONTENT_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ListExporter:
    """Wires a bookmark source to the collector and CSV serializer."""

    def __init__(
        self,
        source: BookmarkSource,
        *,
        page_size: int = MAX_BOOKMARKS_PER_PAGE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._collector = BookmarkCollector(source, page_size=page_size)
        self._serializer = CsvSerializer()
        self._clock = clock

    async def export_list_as_csv(self, list_id: str) -> ExportResult:
        """Export every bookmark of *list_id* as one CSV document.

        Raises whatever the source raises (NOT_FOUND, UPSTREAM, ...) and
        PROTOCOL if the source repeats a cursor.
        """
        log = list_logger(__name__, list_id)
        summary = await self._source.get_list_summary(list_id)
        log.info("Exporting '%s'", summary.name)

        records = await self._collector.collect(list_id)
        csv_text = self._serializer.serialize(records)
        filename = export_filename(summary.name, self._clock())

        log.info("Rendered %d bookmarks as %s", len(records), filename)
        return ExportResult(
            filename=filename,
            csv_text=csv_text,
            list_summary=summary,
            bookmark_count=len(records),
        )
