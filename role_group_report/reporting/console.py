"""
Console table — at-a-glance view of the report; never written to disk.
"""

from __future__ import annotations

from ..config import REPORT_FIELDS
from ..models import Report


def render_console_table(report: Report) -> str:
    """Render rows as a left-aligned table with columns sized to their content."""
    table = [tuple(REPORT_FIELDS)] + [row.as_tuple() for row in report.rows]
    widths = [max(len(cells[i]) for cells in table) for i in range(len(REPORT_FIELDS))]

    def _line(cells) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [_line(table[0]), _line("-" * w for w in widths)]
    lines.extend(_line(cells) for cells in table[1:])
    if not report.rows:
        lines.append("(no matching members)")
    return "\n".join(lines)
