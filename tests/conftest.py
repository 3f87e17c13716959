"""Global test configuration — shared fixtures and safety guards.

This conftest provides:

1. **Output guard**: makes the real ``output/`` directory read-only so
   tests that forget to use ``tmp_path`` get an immediate ``PermissionError``.

2. **Record factories**: ``make_bookmark`` and ``make_link`` build real
   frozen :class:`BookmarkRecord` / :class:`LinkContent` values with
   controlled defaults.

3. **Source double**: ``FakeBookmarkSource`` is a real
   :class:`BookmarkSource` subclass serving in-memory lists page by page,
   recording every request so tests can assert on pagination.
"""

from __future__ import annotations

import contextlib
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from bookmark_export.errors import ActionableError
from bookmark_export.sources.base import (
    BookmarkContent,
    BookmarkRecord,
    BookmarkSource,
    LinkContent,
    ListSummary,
    Page,
    Tag,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

_PROJECT_OUTPUT = Path(__file__).resolve().parent.parent / "output"

CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Source double
# ---------------------------------------------------------------------------


class FakeBookmarkSource(BookmarkSource):
    """In-memory source.  Cursors are ``"offset-<n>"`` strings.

    ``fail_on_request`` raises the given error on the N-th page request
    (1-based).  ``stuck_cursor`` makes every page after the first return
    the same cursor, simulating a misbehaving service.
    """

    def __init__(
        self,
        lists: dict[str, tuple[str, list[BookmarkRecord]]] | None = None,
        *,
        fail_on_request: tuple[int, Exception] | None = None,
        stuck_cursor: bool = False,
    ) -> None:
        self._lists = lists or {}
        self._fail_on_request = fail_on_request
        self._stuck_cursor = stuck_cursor
        self.page_requests: list[tuple[str, int, str | None, bool]] = []
        self.summary_requests: list[str] = []

    @property
    def source_name(self) -> str:
        return "fake"

    async def get_list_summary(self, list_id: str) -> ListSummary:
        self.summary_requests.append(list_id)
        if list_id not in self._lists:
            raise ActionableError.not_found("list", list_id, service="fake")
        return ListSummary(id=list_id, name=self._lists[list_id][0])

    async def fetch_bookmark_page(
        self,
        list_id: str,
        page_size: int,
        cursor: str | None = None,
        *,
        include_content: bool = True,
    ) -> Page:
        self.page_requests.append((list_id, page_size, cursor, include_content))
        if self._fail_on_request and len(self.page_requests) == self._fail_on_request[0]:
            raise self._fail_on_request[1]
        if list_id not in self._lists:
            raise ActionableError.not_found("list", list_id, service="fake")

        records = self._lists[list_id][1]
        start = 0 if cursor is None else int(cursor.removeprefix("offset-"))
        end = start + page_size
        if self._stuck_cursor:
            return Page(bookmarks=tuple(records[start:end]), next_cursor="offset-1")
        next_cursor = f"offset-{end}" if end < len(records) else None
        return Page(bookmarks=tuple(records[start:end]), next_cursor=next_cursor)


@pytest.fixture
def make_source():
    """Factory fixture: returns :class:`FakeBookmarkSource` for construction in tests.

    Usage::

        def test_something(make_source, make_records):
            source = make_source({"l1": ("Reading", make_records(3))})
            source = make_source({}, fail_on_request=(2, RuntimeError("boom")))
    """
    return FakeBookmarkSource


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_link():
    """Factory fixture: returns a callable that produces LinkContent.

    Usage::

        def test_something(make_link):
            content = make_link(url="http://x")
    """

    def _factory(**fields: object) -> LinkContent:
        return LinkContent(**fields)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
def make_bookmark():
    """Factory fixture: returns a callable that produces a BookmarkRecord.

    Defaults produce a minimal link bookmark created at 2024-01-01 UTC
    with no tags and both flags false.

    Usage::

        def test_something(make_bookmark):
            record = make_bookmark()
            record = make_bookmark(bookmark_id="b2", tags=["news", "tech"])
            record = make_bookmark(content=TextContent(text="hello"))
    """

    def _factory(
        bookmark_id: str = "b1",
        *,
        title: str | None = None,
        content: BookmarkContent | None = None,
        tags: list[str] | None = None,
        created_at: datetime = CREATED_AT,
        **fields: object,
    ) -> BookmarkRecord:
        return BookmarkRecord(
            id=bookmark_id,
            created_at=created_at,
            content=content if content is not None else LinkContent(),
            title=title,
            tags=tuple(Tag(name=name) for name in tags or []),
            **fields,  # type: ignore[arg-type]
        )

    return _factory


@pytest.fixture
def make_records(make_bookmark):
    """Factory fixture: ``make_records(n)`` returns n bookmarks with ids b0..b(n-1)."""

    def _factory(n: int) -> list[BookmarkRecord]:
        return [make_bookmark(f"b{i}", title=f"Bookmark {i}") for i in range(n)]

    return _factory


# ---------------------------------------------------------------------------
# Output safety guard
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def _guard_real_output_dir() -> Iterator[None]:
    """Make the real output/ directory read-only during tests.

    Restores original permissions after the session, even on failure.
    If the directory does not exist the guard is silently skipped.
    """
    if not _PROJECT_OUTPUT.is_dir():
        yield
        return

    original_mode = _PROJECT_OUTPUT.stat().st_mode
    _PROJECT_OUTPUT.chmod(original_mode & ~(stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))
    try:
        yield
    finally:
        with contextlib.suppress(OSError):
            _PROJECT_OUTPUT.chmod(original_mode)
