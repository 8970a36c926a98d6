"""
Member Collector
Enumerates the user-type members of each role group into report rows.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..graph.directory import DirectoryService
from ..models import Group, ReportRow

logger = logging.getLogger("role_group_report.collectors.members")


def enumerate_members(directory: DirectoryService, groups: Iterable[Group]) -> list[ReportRow]:
    """
    Return one row per (group, user member) pair.

    Groups without user members contribute nothing. A failure on any group
    aborts the whole enumeration.
    """
    rows: list[ReportRow] = []
    for group in groups:
        members = directory.list_user_members(group.id)
        logger.info(f"[members] {group.display_name}: {len(members)} user members")
        rows.extend(ReportRow.for_member(group, member) for member in members)
    return rows
