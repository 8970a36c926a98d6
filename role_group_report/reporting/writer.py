"""
Report pair writer — the CSV and HTML files of one run, all or nothing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import OutputConfig
from ..models import Report
from .csv_export import export_csv
from .html_report import export_html
from .output import OutputError

logger = logging.getLogger("role_group_report.reporting")


def write_report_files(report: Report, output: OutputConfig, prefix: str) -> list[Path]:
    """
    Write the CSV and HTML views of report.

    Returns both paths. If the HTML file fails, the CSV already written is
    removed so a failed run leaves no half report behind.
    """
    csv_path = export_csv(report, output.csv_path(prefix))
    try:
        html_path = export_html(report, output.html_path(prefix), prefix=prefix)
    except OutputError:
        logger.warning(f"Removing {csv_path} after HTML write failure")
        csv_path.unlink(missing_ok=True)
        raise
    return [csv_path, html_path]
