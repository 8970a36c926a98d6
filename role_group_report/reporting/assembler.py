"""
Report assembly — flattens collected rows into one deterministic report.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from ..models import Report, ReportRow


def sort_rows(rows: Iterable[ReportRow]) -> list[ReportRow]:
    """
    Stable sort by group then member display name.
    Plain str comparison is ordinal, so the order does not depend on locale.
    """
    return sorted(rows, key=lambda r: r.sort_key)


def assemble_report(
    rows: Iterable[ReportRow],
    matched_group_count: int,
    generated_at: Optional[datetime] = None,
) -> Report:
    return Report(
        rows=sort_rows(rows),
        matched_group_count=matched_group_count,
        generated_at=generated_at or datetime.now(timezone.utc),
    )
