"""CLI command handlers for bookmark-export.

Each public handler corresponds to a CLI subcommand and encapsulates
the wiring, orchestration, and output for that command.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from bookmark_export.config import DEFAULT_SETTINGS_PATH, load_settings
from bookmark_export.errors import ActionableError
from bookmark_export.logging import configure_file_logging, logger, set_verbose
from bookmark_export.pipeline.runner import ListExporter
from bookmark_export.sources.api import ApiBookmarkSource


def handle_export(args: argparse.Namespace) -> None:
    """Export one list to CSV.

    Writes ``<output_dir>/<derived filename>`` and prints its path, or
    prints the CSV itself with ``--stdout``.  Nothing is written when
    the export fails.
    """
    settings = load_settings(args.settings)

    async def _run() -> None:
        async with ApiBookmarkSource.from_config(settings.api) as source:
            exporter = ListExporter(source, page_size=settings.export.page_size)
            result = await exporter.export_list_as_csv(args.list_id)

        if args.stdout:
            sys.stdout.write(result.csv_text)
            sys.stdout.write("\n")
            return

        out_dir = Path(args.output_dir or settings.export.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / result.filename
        out_path.write_text(result.csv_text, encoding="utf-8", newline="")
        print(f"Exported {result.bookmark_count} bookmarks from '{result.list_summary.name}'")
        print(f"  → {out_path}")

    asyncio.run(_run())


def handle_lists(args: argparse.Namespace) -> None:
    """Print every list visible to the configured API key."""
    settings = load_settings(args.settings)

    async def _run() -> None:
        async with ApiBookmarkSource.from_config(settings.api) as source:
            lists = await source.get_lists()

        if not lists:
            print("No lists found.")
            return
        width = max(len(item.id) for item in lists)
        for item in sorted(lists, key=lambda x: x.name.lower()):
            print(f"  {item.id:<{width}}  {item.name}")

    asyncio.run(_run())


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="bookmark-export",
        description="Export every bookmark of a list to a CSV file",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=DEFAULT_SETTINGS_PATH,
        metavar="PATH",
        help=f"Settings file (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Also write a timestamped log file to DIR",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every page request")
    sub = parser.add_subparsers(dest="command", required=True)

    # -- export --------------------------------------------------------------
    export_p = sub.add_parser("export", help="Export a list's bookmarks as CSV")
    export_p.add_argument("list_id", type=str, help="Id of the list to export")
    export_p.add_argument(
        "--output-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory for the CSV file (default: [export].output_dir)",
    )
    export_p.add_argument(
        "--stdout",
        action="store_true",
        help="Print the CSV instead of writing a file",
    )

    # -- lists ---------------------------------------------------------------
    sub.add_parser("lists", help="Show the ids and names of your lists")

    return parser


_HANDLERS = {
    "export": handle_export,
    "lists": handle_lists,
}


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    set_verbose(args.verbose)
    if args.log_dir:
        run_label = f"export-{args.list_id}" if args.command == "export" else args.command
        configure_file_logging(args.log_dir, run_label=run_label)

    try:
        _HANDLERS[args.command](args)
    except ActionableError as exc:
        logger.error("%s", exc.error)
        if exc.suggestion:
            print(f"Suggestion: {exc.suggestion}", file=sys.stderr)
        sys.exit(1)
