"""Shared data contract and abstract base class for bookmark sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class ContentKind(StrEnum):
    """Label of a bookmark's content variant, as written to the ``type`` column."""

    LINK = "link"
    TEXT = "text"
    ASSET = "asset"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Tag:
    name: str
    id: str | None = None


# ---------------------------------------------------------------------------
# Content variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LinkContent:
    """A saved web page.  The only variant with exportable columns."""

    url: str | None = None
    description: str | None = None
    author: str | None = None
    publisher: str | None = None
    date_published: datetime | None = None
    date_modified: datetime | None = None
    favicon: str | None = None
    image_url: str | None = None

    @property
    def kind(self) -> ContentKind:
        return ContentKind.LINK


@dataclass(frozen=True)
class TextContent:
    text: str | None = None
    source_url: str | None = None

    @property
    def kind(self) -> ContentKind:
        return ContentKind.TEXT


@dataclass(frozen=True)
class AssetContent:
    asset_type: str | None = None
    asset_id: str | None = None
    file_name: str | None = None
    source_url: str | None = None

    @property
    def kind(self) -> ContentKind:
        return ContentKind.ASSET


@dataclass(frozen=True)
class UnknownContent:
    @property
    def kind(self) -> ContentKind:
        return ContentKind.UNKNOWN


BookmarkContent = LinkContent | TextContent | AssetContent | UnknownContent


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BookmarkRecord:
    """Source-agnostic bookmark consumed by the collector and CSV serializer.

    Required fields are always populated by the source.  Optional fields
    are ``None`` when the service did not provide them.
    """

    id: str
    created_at: datetime
    content: BookmarkContent
    title: str | None = None
    note: str | None = None
    summary: str | None = None
    modified_at: datetime | None = None
    archived: bool = False
    favourited: bool = False
    source: str | None = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ListSummary:
    """Identifier and display name of a bookmark list."""

    id: str
    name: str
    icon: str | None = None
    parent_id: str | None = None


@dataclass(frozen=True)
class Page:
    """One page of a list's bookmarks.  ``next_cursor is None`` marks the last page."""

    bookmarks: tuple[BookmarkRecord, ...]
    next_cursor: str | None = None


class BookmarkSource(ABC):
    """Read-only provider interface for list metadata and bookmark pages.

    Implementations raise :class:`~bookmark_export.errors.ActionableError`
    on failure; callers propagate those errors unchanged.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name used in log lines and error messages."""
        ...

    @abstractmethod
    async def get_list_summary(self, list_id: str) -> ListSummary:
        """Return the list's id and display name.

        Raises NOT_FOUND when the list does not exist or the caller
        may not read it.
        """
        ...

    @abstractmethod
    async def fetch_bookmark_page(
        self,
        list_id: str,
        page_size: int,
        cursor: str | None = None,
        *,
        include_content: bool = True,
    ) -> Page:
        """Return the page of bookmarks starting at *cursor*.

        ``cursor=None`` requests the first page.  Ordering is stable
        across pages for the lifetime of one pagination run.
        """
        ...
