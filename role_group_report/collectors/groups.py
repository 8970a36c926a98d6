"""
Group Collector
Locates the role groups: a server-side prefix query followed by a local
suffix filter.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..graph.directory import DirectoryService
from ..models import Group

logger = logging.getLogger("role_group_report.collectors.groups")


def locate_groups(directory: DirectoryService, prefix: str) -> list[Group]:
    """
    Return every group whose display name starts with prefix.
    An empty list means nothing matched; query failures propagate.
    """
    groups = list(directory.list_groups_by_prefix(prefix))
    logger.info(f"[groups] {len(groups)} groups match prefix {prefix!r}")
    return groups


def filter_by_suffix(groups: Iterable[Group], suffixes: Iterable[str]) -> list[Group]:
    """Keep groups whose display name ends with one of suffixes (case-sensitive)."""
    suffixes = tuple(suffixes)
    if not suffixes:
        return []
    return [g for g in groups if g.display_name.endswith(suffixes)]
