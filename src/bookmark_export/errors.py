"""Actionable error hierarchy for bookmark-export.

Errors are classified by **recovery path**, not by origin.
Each error carries structured guidance for two audiences:
  - The calling code (typed ``error_type`` for routing)
  - The human operator (``suggestion`` + ``troubleshooting`` steps)

The export core never retries and never suppresses: every failure is
raised as an :class:`ActionableError` and aborts the whole export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


class ErrorType(StrEnum):
    """Recovery-path categories: what to *do*, not where it came from."""

    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    PROTOCOL = "protocol"
    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    CONFIG = "config"
    PARSE = "parse"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Troubleshooting:
    """Sequential, human-readable recovery steps for the operator."""

    steps: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"steps": self.steps}


# ---------------------------------------------------------------------------
# Base actionable error
# ---------------------------------------------------------------------------


@dataclass
class ActionableError(Exception):
    """Structured error with embedded recovery guidance.

    Use the factory classmethods rather than constructing directly;
    they encode domain knowledge so callers don't have to.
    """

    error: str
    error_type: ErrorType
    service: str

    success: bool = field(default=False, init=False)
    suggestion: str | None = None
    troubleshooting: Troubleshooting | None = None
    context: dict[str, Any] | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def __post_init__(self) -> None:
        super().__init__(self.error)

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Compact JSON-ready dict; ``None`` values are excluded."""
        result: dict[str, Any] = {
            "success": self.success,
            "error": self.error,
            "error_type": self.error_type.value,
            "service": self.service,
            "timestamp": self.timestamp,
        }
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion
        if self.troubleshooting is not None:
            result["troubleshooting"] = self.troubleshooting.to_dict()
        if self.context is not None:
            result["context"] = self.context
        return result

    # -- factory methods -----------------------------------------------------

    @classmethod
    def not_found(
        cls,
        resource: str,
        identifier: str,
        *,
        service: str = "bookmark-api",
        suggestion: str | None = None,
    ) -> ActionableError:
        """Resource does not exist, or the caller is not allowed to see it."""
        return cls(
            error=f"{resource.capitalize()} '{identifier}' was not found or is not accessible",
            error_type=ErrorType.NOT_FOUND,
            service=service,
            suggestion=suggestion or f"Verify the {resource} id with 'bookmark-export lists'",
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Run: bookmark-export lists",
                    f"2. Check that '{identifier}' appears in the output",
                    "3. Check that the API key belongs to the list owner",
                ]
            ),
            context={"resource": resource, "id": identifier},
        )

    @classmethod
    def upstream(
        cls,
        service: str,
        operation: str,
        raw_error: str,
        *,
        status_code: int | None = None,
        suggestion: str | None = None,
    ) -> ActionableError:
        """The bookmark source failed mid-operation.  Nothing is exported."""
        context: dict[str, Any] = {"operation": operation}
        if status_code is not None:
            context["status_code"] = status_code
        return cls(
            error=f"{service} failed during {operation}: {raw_error}",
            error_type=ErrorType.UPSTREAM,
            service=service,
            suggestion=suggestion or f"Check that {service} is healthy and re-run the export",
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Check the {service} server logs",
                    "2. Re-run the export; no partial file was written",
                ]
            ),
            context=context,
        )

    @classmethod
    def protocol(
        cls,
        service: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """The source broke its pagination contract (e.g. a repeated cursor)."""
        return cls(
            error=f"Pagination protocol violation from {service}: {reason}",
            error_type=ErrorType.PROTOCOL,
            service=service,
            suggestion=suggestion or f"{service} returned a cursor that does not advance; report it upstream",
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Re-run with --verbose to log every cursor",
                    f"2. Report the repeated cursor to the {service} maintainers",
                ]
            ),
        )

    @classmethod
    def authentication(
        cls,
        service: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Missing, expired, or rejected API key."""
        return cls(
            error=f"Authentication failed for {service}: {raw_error}",
            error_type=ErrorType.AUTHENTICATION,
            service=service,
            suggestion=suggestion or "Create a new API key and export it in the configured variable",
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Open the bookmark service settings and create an API key",
                    "2. Export it in the variable named by [api].api_key_env",
                    "3. Re-run the command",
                ]
            ),
        )

    @classmethod
    def connection(
        cls,
        service: str,
        url: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Service unreachable or the request timed out."""
        return cls(
            error=f"Cannot connect to {service} at {url}: {raw_error}",
            error_type=ErrorType.CONNECTION,
            service=service,
            suggestion=suggestion or f"Verify {service} is running at {url}",
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Verify {service} is running",
                    f"2. Test connectivity: curl -s {url}",
                    "3. Check [api].base_url in config/settings.toml",
                    "4. Re-run the command",
                ]
            ),
        )

    @classmethod
    def config(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Missing or invalid configuration in settings.toml."""
        return cls(
            error=f"Configuration error — {field_name}: {reason}",
            error_type=ErrorType.CONFIG,
            service="settings.toml",
            suggestion=suggestion or f"Fix '{field_name}' in config/settings.toml",
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Open config/settings.toml",
                    f"2. Locate the '{field_name}' setting",
                    f"3. Fix the issue: {reason}",
                    "4. Save and re-run",
                ]
            ),
        )

    @classmethod
    def parse(
        cls,
        source: str,
        location: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """A payload or file could not be decoded into the expected shape."""
        return cls(
            error=f"Parse failure in {source} at {location}: {raw_error}",
            error_type=ErrorType.PARSE,
            service=source,
            suggestion=suggestion or f"The {source} payload shape may have changed",
            context={"location": location},
        )

    @classmethod
    def validation(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Input validation failure (TOML values, CLI args, etc.)."""
        return cls(
            error=f"Validation error — {field_name}: {reason}",
            error_type=ErrorType.VALIDATION,
            service="validation",
            suggestion=suggestion or f"Fix '{field_name}': {reason}",
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Check the value of '{field_name}'",
                    f"2. Issue: {reason}",
                    "3. Correct and retry",
                ]
            ),
        )

    @classmethod
    def unexpected(
        cls,
        service: str,
        operation: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Catch-all for truly unexpected failures."""
        return cls(
            error=f"Unexpected error in {service} during {operation}: {raw_error}",
            error_type=ErrorType.UNEXPECTED,
            service=service,
            suggestion=suggestion or "This is an unexpected error, check logs for details",
        )
