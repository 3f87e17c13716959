"""Export layer — bookmark collection, CSV rendering, and file naming."""

from bookmark_export.export.collector import BookmarkCollector
from bookmark_export.export.csv_export import CSV_COLUMNS, CsvSerializer
from bookmark_export.export.naming import export_filename, sanitize_list_name

__all__ = [
    "CSV_COLUMNS",
    "BookmarkCollector",
    "CsvSerializer",
    "export_filename",
    "sanitize_list_name",
]
