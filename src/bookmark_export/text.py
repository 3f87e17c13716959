"""Shared text-processing utilities.

Pure functions with no domain dependencies, safe to import from any
layer (CLI, pipeline, export, sources).
"""

from __future__ import annotations

from datetime import datetime, timezone


def format_timestamp(value: datetime) -> str:
    """Render *value* as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC already.

    >>> format_timestamp(datetime(2024, 1, 1, tzinfo=timezone.utc))
    '2024-01-01T00:00:00.000Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"
