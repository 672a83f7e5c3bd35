"""Output formatting modules."""

from .formatters import format_table, format_json, format_boundary_table, format_subjects
from .csv_export import export_to_csv

__all__ = [
    "format_table",
    "format_json",
    "format_boundary_table",
    "format_subjects",
    "export_to_csv",
]
