"""Configuration loading and validation.

Loads ``settings.toml`` and validates all fields at startup, before any
request is sent to the bookmark service.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``api`` and ``export``.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from bookmark_export.errors import ActionableError

# Largest page the bookmark service accepts for a single request
MAX_BOOKMARKS_PER_PAGE = 100

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass
class ApiConfig:
    """Bookmark service connection settings from ``[api]``."""

    base_url: str = "http://localhost:3000/api/v1"
    api_key_env: str = "BOOKMARKS_API_KEY"
    timeout: float = 30.0


@dataclass
class ExportConfig:
    """Export settings from ``[export]``."""

    page_size: int = MAX_BOOKMARKS_PER_PAGE
    output_dir: str = "./output"


@dataclass
class Settings:
    """Top-level validated configuration."""

    api: ApiConfig
    export: ExportConfig = field(default_factory=ExportConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("config/settings.toml")


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~bookmark_export.errors.ActionableError`:
      - CONFIG if the file is missing or a required section is absent
      - VALIDATION if field values are out of range
      - PARSE if the TOML is malformed

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or copy from config/settings.toml.example",
        )

    raw_text = filepath.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source="settings",
            location=str(filepath),
            raw_error=str(exc),
            suggestion=f"Fix TOML syntax in {filepath}",
        ) from None

    return _validate(data, filepath)


def _validate(data: dict[str, object], filepath: Path) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- api section ---------------------------------------------------------
    api_data = _require_section(data, "api", filepath)

    base_url = str(api_data.get("base_url", "http://localhost:3000/api/v1"))
    if not base_url.startswith(("http://", "https://")):
        raise ActionableError.validation(
            field_name="api.base_url",
            reason=f"'{base_url}' is missing a scheme (http:// or https://)",
            suggestion="Set [api].base_url to a URL starting with http:// or https://",
        )

    api_key_env = str(api_data.get("api_key_env", "BOOKMARKS_API_KEY")).strip()
    if not api_key_env:
        raise ActionableError.config(
            field_name="api.api_key_env",
            reason="api.api_key_env must name an environment variable",
        )

    timeout = float(api_data.get("timeout", 30.0))  # type: ignore[arg-type]
    if timeout <= 0:
        raise ActionableError.validation(
            field_name="api.timeout",
            reason=f"is {timeout} — must be > 0",
            suggestion="Set [api].timeout to a positive number of seconds",
        )

    api = ApiConfig(
        base_url=base_url.rstrip("/"),
        api_key_env=api_key_env,
        timeout=timeout,
    )

    # -- export section ------------------------------------------------------
    export_data = data.get("export", {})
    if not isinstance(export_data, dict):
        export_data = {}

    page_size = int(export_data.get("page_size", MAX_BOOKMARKS_PER_PAGE))
    if page_size < 1:
        raise ActionableError.validation(
            field_name="export.page_size",
            reason=f"is {page_size} — must be >= 1",
            suggestion=f"Set [export].page_size to a value between 1 and {MAX_BOOKMARKS_PER_PAGE}",
        )
    if page_size > MAX_BOOKMARKS_PER_PAGE:
        raise ActionableError.validation(
            field_name="export.page_size",
            reason=f"is {page_size} — must be <= {MAX_BOOKMARKS_PER_PAGE}",
            suggestion=f"Set [export].page_size to a value between 1 and {MAX_BOOKMARKS_PER_PAGE}",
        )

    export = ExportConfig(
        page_size=page_size,
        output_dir=str(export_data.get("output_dir", "./output")),
    )

    return Settings(api=api, export=export)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_section(data: dict[str, object], name: str, filepath: Path) -> dict[str, object]:
    """Return a required top-level section, or raise CONFIG error."""
    section = data.get(name)
    if section is None or not isinstance(section, dict):
        raise ActionableError.config(
            field_name=name,
            reason=f"Required section [{name}] is missing from {filepath}",
            suggestion=f"Add a [{name}] section to {filepath}",
        )
    return section
