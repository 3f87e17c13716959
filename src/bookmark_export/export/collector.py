"""Bookmark collector — drains a list's paginated bookmarks into memory.

Pages are requested strictly one after another: each request carries
the cursor returned by the previous page, so fetches cannot be
parallelised.  Errors raised by the source propagate unchanged; the
collector never retries and never returns a partial result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookmark_export.config import MAX_BOOKMARKS_PER_PAGE
from bookmark_export.errors import ActionableError
from bookmark_export.logging import list_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from bookmark_export.sources.base import BookmarkRecord, BookmarkSource, Page


class BookmarkCollector:
    """Fetches every bookmark of a list by following continuation cursors.

    Usage::

        collector = BookmarkCollector(source, page_size=100)
        records = await collector.collect("list-id")
    """

    def __init__(
        self,
        source: BookmarkSource,
        *,
        page_size: int = MAX_BOOKMARKS_PER_PAGE,
    ) -> None:
        if page_size < 1:
            raise ActionableError.validation(
                field_name="page_size",
                reason=f"is {page_size} — must be >= 1",
            )
        self._source = source
        self.page_size = page_size

    async def iter_pages(self, list_id: str) -> AsyncIterator[Page]:
        """Yield the list's pages in delivery order until one has no cursor.

        Finite and not restartable: iterating again re-issues every
        request from the first page.  A cursor that was already
        requested raises PROTOCOL instead of looping forever.
        """
        log = list_logger(__name__, list_id)
        requested: set[str] = set()
        cursor: str | None = None
        page_number = 0

        while True:
            page = await self._source.fetch_bookmark_page(
                list_id,
                self.page_size,
                cursor,
                include_content=True,
            )
            page_number += 1
            log.debug(
                "Fetched page %d (%d bookmarks, next cursor %r)",
                page_number,
                len(page.bookmarks),
                page.next_cursor,
            )
            yield page

            if page.next_cursor is None:
                return

            if cursor is not None:
                requested.add(cursor)
            if page.next_cursor in requested:
                raise ActionableError.protocol(
                    self._source.source_name,
                    f"cursor {page.next_cursor!r} for list '{list_id}' was already "
                    f"requested (page {page_number})",
                )
            cursor = page.next_cursor

    async def collect(self, list_id: str) -> list[BookmarkRecord]:
        """Return every bookmark in the list, in page-delivery order."""
        log = list_logger(__name__, list_id)
        records: list[BookmarkRecord] = []
        seen_ids: set[str] = set()
        pages = 0

        async for page in self.iter_pages(list_id):
            pages += 1
            for record in page.bookmarks:
                if record.id in seen_ids:
                    log.warning("Bookmark %s appeared more than once", record.id)
                seen_ids.add(record.id)
                records.append(record)

        log.info("Collected %d bookmarks in %d page(s)", len(records), pages)
        return records
