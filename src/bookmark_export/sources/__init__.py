"""Source layer — read-only providers of list metadata and bookmark pages."""

from bookmark_export.sources.api import ApiBookmarkSource
from bookmark_export.sources.base import (
    AssetContent,
    BookmarkContent,
    BookmarkRecord,
    BookmarkSource,
    ContentKind,
    LinkContent,
    ListSummary,
    Page,
    Tag,
    TextContent,
    UnknownContent,
)

__all__ = [
    "ApiBookmarkSource",
    "AssetContent",
    "BookmarkContent",
    "BookmarkRecord",
    "BookmarkSource",
    "ContentKind",
    "LinkContent",
    "ListSummary",
    "Page",
    "Tag",
    "TextContent",
    "UnknownContent",
]
