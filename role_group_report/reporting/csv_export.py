"""
CSV exporter — One row per (group, member) pair under the report headers.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from ..config import REPORT_FIELDS
from ..models import Report
from .output import write_new_file


def render_csv(report: Report) -> str:
    """Render report as CSV text with a header row and standard quoting."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=REPORT_FIELDS)
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row.to_dict())
    return buffer.getvalue()


def export_csv(report: Report, path: Path) -> Path:
    """
    Write the CSV report to path (UTF-8, no BOM).

    Returns:
        The created CSV file path.
    """
    return write_new_file(path, render_csv(report))
