"""HTTP bookmark source for the bookmark service's REST API.

Wraps an :class:`httpx.AsyncClient` to provide:

- **List metadata**: ``GET /lists/{id}`` → :class:`ListSummary`
- **Bookmark pages**: ``GET /lists/{id}/bookmarks`` → :class:`Page`
- **List discovery**: ``GET /lists`` → all lists visible to the API key

Requests are never retried here; HTTP and transport failures are
converted to :class:`~bookmark_export.errors.ActionableError` and
raised to the caller.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import httpx

from bookmark_export.errors import ActionableError
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

if TYPE_CHECKING:
    from types import TracebackType

    from bookmark_export.config import ApiConfig

logger = logging.getLogger(__name__)

_SERVICE = "bookmark-api"

# Newest first, matching the order the web UI shows a list in
_SORT_ORDER = "desc"


class ApiBookmarkSource(BookmarkSource):
    """Reads lists and bookmarks over the REST API.

    Usage::

        async with ApiBookmarkSource.from_config(settings.api) as source:
            summary = await source.get_list_summary("list-id")
            page = await source.fetch_bookmark_page("list-id", 100)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ApiConfig) -> ApiBookmarkSource:
        """Build a source from ``[api]`` settings, reading the key from the environment."""
        api_key = os.environ.get(config.api_key_env, "").strip()
        if not api_key:
            raise ActionableError.config(
                field_name="api.api_key_env",
                reason=f"Environment variable {config.api_key_env} is not set",
                suggestion=f"Export your API key: export {config.api_key_env}=<key>",
            )
        return cls(config.base_url, api_key, timeout=config.timeout)

    @property
    def source_name(self) -> str:
        return _SERVICE

    async def __aenter__(self) -> ApiBookmarkSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- Public API ----------------------------------------------------------

    async def get_list_summary(self, list_id: str) -> ListSummary:
        data = await self._get_json(f"/lists/{list_id}", operation="get list", list_id=list_id)
        return parse_list_summary(data)

    async def get_lists(self) -> list[ListSummary]:
        """Return every list visible to the API key."""
        data = await self._get_json("/lists", operation="get lists")
        items = data.get("lists")
        if not isinstance(items, list):
            raise ActionableError.parse(_SERVICE, "lists", "response has no 'lists' array")
        return [parse_list_summary(item) for item in items]

    async def fetch_bookmark_page(
        self,
        list_id: str,
        page_size: int,
        cursor: str | None = None,
        *,
        include_content: bool = True,
    ) -> Page:
        params: dict[str, str | int] = {
            "limit": page_size,
            "includeContent": "true" if include_content else "false",
            "sortOrder": _SORT_ORDER,
        }
        if cursor is not None:
            params["cursor"] = cursor

        data = await self._get_json(
            f"/lists/{list_id}/bookmarks",
            operation="get bookmarks",
            list_id=list_id,
            params=params,
        )

        items = data.get("bookmarks")
        if not isinstance(items, list):
            raise ActionableError.parse(_SERVICE, "bookmarks", "response has no 'bookmarks' array")

        next_cursor = data.get("nextCursor")
        if next_cursor is not None and not isinstance(next_cursor, str):
            raise ActionableError.parse(
                _SERVICE, "nextCursor", f"expected string or null, got {type(next_cursor).__name__}"
            )

        return Page(
            bookmarks=tuple(parse_bookmark(item) for item in items),
            next_cursor=next_cursor or None,
        )

    # -- Transport -----------------------------------------------------------

    async def _get_json(
        self,
        path: str,
        *,
        operation: str,
        list_id: str | None = None,
        params: dict[str, str | int] | None = None,
    ) -> dict[str, Any]:
        """GET *path* and return the decoded JSON object.

        Status mapping: 401 → AUTHENTICATION, 403/404 → NOT_FOUND,
        any other error status → UPSTREAM, transport failure → CONNECTION.
        """
        logger.debug("GET %s%s params=%s", self.base_url, path, params)
        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as exc:
            raise ActionableError.connection(
                service=_SERVICE,
                url=self.base_url,
                raw_error=str(exc) or type(exc).__name__,
            ) from exc

        status = response.status_code
        if status == 401:
            raise ActionableError.authentication(_SERVICE, f"{operation} returned 401")
        if status in (403, 404) and list_id is not None:
            raise ActionableError.not_found("list", list_id, service=_SERVICE)
        if status >= 400:
            raise ActionableError.upstream(
                _SERVICE,
                operation,
                _error_message(response),
                status_code=status,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ActionableError.parse(_SERVICE, path, f"invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ActionableError.parse(_SERVICE, path, "expected a JSON object")
        return data


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


def parse_list_summary(data: Any) -> ListSummary:
    if not isinstance(data, dict):
        raise ActionableError.parse(_SERVICE, "list", "expected a JSON object")
    return ListSummary(
        id=_require_str(data, "id", "list"),
        name=_require_str(data, "name", "list"),
        icon=_optional_str(data, "icon"),
        parent_id=_optional_str(data, "parentId"),
    )


def parse_bookmark(data: Any) -> BookmarkRecord:
    """Convert one bookmark JSON object into a :class:`BookmarkRecord`."""
    if not isinstance(data, dict):
        raise ActionableError.parse(_SERVICE, "bookmark", "expected a JSON object")

    bookmark_id = _require_str(data, "id", "bookmark")
    location = f"bookmark {bookmark_id}"

    created_at = parse_datetime(data.get("createdAt"), f"{location}.createdAt")
    if created_at is None:
        raise ActionableError.parse(_SERVICE, f"{location}.createdAt", "missing creation timestamp")

    tags = _parse_tags(data.get("tags"), f"{location}.tags")

    return BookmarkRecord(
        id=bookmark_id,
        created_at=created_at,
        content=parse_content(data.get("content"), location),
        title=_optional_str(data, "title"),
        note=_optional_str(data, "note"),
        summary=_optional_str(data, "summary"),
        modified_at=parse_datetime(data.get("modifiedAt"), f"{location}.modifiedAt"),
        archived=_optional_bool(data, "archived", location),
        favourited=_optional_bool(data, "favourited", location),
        source=_optional_str(data, "source"),
        tags=tags,
    )


def parse_content(data: Any, location: str = "bookmark") -> BookmarkContent:
    """Map a ``content`` object to its variant.  Unrecognised kinds become UnknownContent."""
    if not isinstance(data, dict):
        return UnknownContent()

    kind = data.get("type")
    if kind == ContentKind.LINK:
        return LinkContent(
            url=_optional_str(data, "url"),
            description=_optional_str(data, "description"),
            author=_optional_str(data, "author"),
            publisher=_optional_str(data, "publisher"),
            date_published=parse_datetime(data.get("datePublished"), f"{location}.datePublished"),
            date_modified=parse_datetime(data.get("dateModified"), f"{location}.dateModified"),
            favicon=_optional_str(data, "favicon"),
            image_url=_optional_str(data, "imageUrl"),
        )
    if kind == ContentKind.TEXT:
        return TextContent(
            text=_optional_str(data, "text"),
            source_url=_optional_str(data, "sourceUrl"),
        )
    if kind == ContentKind.ASSET:
        return AssetContent(
            asset_type=_optional_str(data, "assetType"),
            asset_id=_optional_str(data, "assetId"),
            file_name=_optional_str(data, "fileName"),
            source_url=_optional_str(data, "sourceUrl"),
        )
    if kind != ContentKind.UNKNOWN:
        logger.debug("Unrecognised content type %r at %s, exporting as unknown", kind, location)
    return UnknownContent()


def parse_datetime(value: Any, location: str) -> datetime | None:
    """Parse an ISO-8601 timestamp.  Naive values are taken to be UTC."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ActionableError.parse(_SERVICE, location, f"expected ISO-8601 string, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ActionableError.parse(_SERVICE, location, str(exc)) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_str(data: dict[str, Any], key: str, location: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ActionableError.parse(_SERVICE, f"{location}.{key}", "required string field is missing")
    return value


def _optional_bool(data: dict[str, Any], key: str, location: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ActionableError.parse(_SERVICE, f"{location}.{key}", f"expected a boolean, got {value!r}")
    return value


def _parse_tags(value: Any, location: str) -> tuple[Tag, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ActionableError.parse(_SERVICE, location, f"expected an array, got {value!r}")
    tags: list[Tag] = []
    for index, tag in enumerate(value):
        if not isinstance(tag, dict):
            raise ActionableError.parse(_SERVICE, f"{location}[{index}]", f"expected an object, got {tag!r}")
        tags.append(Tag(name=_require_str(tag, "name", f"{location}[{index}]"), id=_optional_str(tag, "id")))
    return tuple(tags)


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _error_message(response: httpx.Response) -> str:
    """Best-effort error text from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "code"):
            if isinstance(body.get(key), str):
                return f"{response.status_code} {body[key]}"
    return f"{response.status_code} {response.reason_phrase}".strip()
