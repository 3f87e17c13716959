"""Entry point for ``python -m bookmark_export``."""

from __future__ import annotations

from bookmark_export.cli import main

if __name__ == "__main__":
    main()
