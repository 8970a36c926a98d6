"""
HTML Membership Report — single-file HTML output with inline CSS.

The document carries its own styling and references no external resources,
so it can be mailed or archived as-is next to the CSV.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import Any

from ..config import REPORT_FIELDS
from ..models import Report
from .output import write_new_file


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def _esc(val: Any) -> str:
    if val is None:
        return ""
    return html.escape(str(val))


def render_table(report: Report) -> str:
    """Render the membership table; depends only on the report rows."""
    header = "".join(f"<th>{_esc(name)}</th>" for name in REPORT_FIELDS)
    body = "\n".join(
        "        <tr>" + "".join(f"<td>{_esc(cell)}</td>" for cell in row.as_tuple()) + "</tr>"
        for row in report.rows
    )
    return f"""<table>
      <thead>
        <tr>{header}</tr>
      </thead>
      <tbody>
{body}
      </tbody>
    </table>"""


# ---------------------------------------------------------------------------
# Main HTML builder
# ---------------------------------------------------------------------------

def render_html(report: Report, prefix: str = "") -> str:
    """Render the full HTML document for report."""
    title = f"{prefix} Group Membership Report".strip()

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{_esc(title)}</title>
<style>
*, *::before, *::after {{ box-sizing: border-box; margin: 0; padding: 0; }}
html {{ font-size: 15px; }}
body {{
  font-family: "Segoe UI", -apple-system, BlinkMacSystemFont, Roboto, "Helvetica Neue", sans-serif;
  background: #f8fafc; color: #1e293b; line-height: 1.55;
}}
.page {{ max-width: 1100px; margin: 0 auto; padding: 2rem 1.5rem; }}
.report-header {{
  background: linear-gradient(135deg, #0f172a 0%, #1e3a5f 100%);
  color: #f1f5f9; padding: 1.6rem 2rem; border-radius: 12px; margin-bottom: 1.5rem;
}}
.report-header h1 {{ font-size: 1.5rem; font-weight: 700; margin-bottom: .4rem; }}
.report-header .meta {{ font-size: .85rem; opacity: .8; line-height: 1.7; }}
table {{
  width: 100%; border-collapse: collapse; background: #fff;
  border-radius: 10px; overflow: hidden; box-shadow: 0 1px 3px rgba(0,0,0,.08);
}}
th {{
  background: #1e3a5f; color: #f1f5f9; text-align: left;
  font-size: .8rem; text-transform: uppercase; letter-spacing: .04em; padding: .6rem .9rem;
}}
td {{ padding: .5rem .9rem; border-top: 1px solid #e2e8f0; font-size: .9rem; }}
tbody tr:nth-child(even) {{ background: #f1f5f9; }}
</style>
</head>
<body>
<div class="page">

  <div class="report-header">
    <h1>{_esc(title)}</h1>
    <div class="meta">
      <div>Generated: {_esc(report.generated_label)}</div>
      <div>Groups matched: {report.matched_group_count}, Rows: {report.row_count}</div>
    </div>
  </div>

  <section class="report-section">
    {render_table(report)}
  </section>

</div>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def export_html(report: Report, path: Path, prefix: str = "") -> Path:
    """
    Generate a self-contained HTML membership report.

    Returns the Path to the written file.
    """
    return write_new_file(path, render_html(report, prefix=prefix))
