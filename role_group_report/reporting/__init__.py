"""Reporting package — console, CSV and HTML views of the membership report."""

from .assembler import assemble_report, sort_rows
from .console import render_console_table
from .csv_export import export_csv, render_csv
from .html_report import export_html, render_html
from .output import OutputError
from .writer import write_report_files

__all__ = [
    "assemble_report",
    "sort_rows",
    "render_console_table",
    "export_csv",
    "render_csv",
    "export_html",
    "render_html",
    "OutputError",
    "write_report_files",
]
