"""
Directory capability interface and its Microsoft Graph implementation.

The pipeline only needs two directory operations; anything that implements
DirectoryService (a Graph-backed directory or an in-memory fake) can drive it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..models import Group, UserMember
from .client import GraphClient

logger = logging.getLogger("role_group_report.graph.directory")

GROUP_SELECT = "id,displayName"
USER_SELECT = "id,displayName,userPrincipalName"


def odata_quote(value: str) -> str:
    """Quote a string literal for an OData $filter expression."""
    return "'" + value.replace("'", "''") + "'"


class DirectoryService(ABC):
    """Read-only directory operations; each handles pagination internally."""

    @abstractmethod
    def list_groups_by_prefix(self, prefix: str) -> list[Group]:
        """Return every group whose display name starts with prefix."""

    @abstractmethod
    def list_user_members(self, group_id: str) -> list[UserMember]:
        """Return the user-type direct members of a group."""


class GraphDirectory(DirectoryService):
    """DirectoryService backed by an authenticated GraphClient session."""

    def __init__(self, client: GraphClient):
        self.client = client

    def list_groups_by_prefix(self, prefix: str) -> list[Group]:
        params = {
            "$filter": f"startswith(displayName,{odata_quote(prefix)})",
            "$select": GROUP_SELECT,
        }
        items = self.client.get_all_pages("groups", params=params)
        logger.debug(f"Graph returned {len(items)} groups for prefix {prefix!r}")
        return [Group.from_graph(item) for item in items]

    def list_user_members(self, group_id: str) -> list[UserMember]:
        # The microsoft.graph.user cast drops devices, service principals
        # and nested groups on the server side.
        params = {
            "$select": USER_SELECT,
            "$count": "true",
        }
        items = self.client.get_all_pages(
            f"groups/{group_id}/members/microsoft.graph.user", params=params
        )
        return [UserMember.from_graph(item) for item in items]
