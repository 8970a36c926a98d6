"""
Report data models — Directory entities and the rows of the membership report.
All of them live for a single run only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .config import REPORT_FIELDS


@dataclass(frozen=True)
class Group:
    """A directory group as returned by the prefix query."""
    id: str
    display_name: str

    @classmethod
    def from_graph(cls, item: dict[str, Any]) -> "Group":
        return cls(id=item.get("id") or "", display_name=item.get("displayName") or "")


@dataclass(frozen=True)
class UserMember:
    """A user-type member of a group."""
    id: str
    display_name: str
    user_principal_name: str

    @classmethod
    def from_graph(cls, item: dict[str, Any]) -> "UserMember":
        return cls(
            id=item.get("id") or "",
            display_name=item.get("displayName") or "",
            user_principal_name=item.get("userPrincipalName") or "",
        )


@dataclass(frozen=True)
class ReportRow:
    """One (group, member) pair of the report."""
    group_display_name: str
    member_display_name: str
    member_upn: str

    @classmethod
    def for_member(cls, group: Group, member: UserMember) -> "ReportRow":
        return cls(
            group_display_name=group.display_name,
            member_display_name=member.display_name,
            member_upn=member.user_principal_name,
        )

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.group_display_name, self.member_display_name)

    def to_dict(self) -> dict[str, str]:
        """Row keyed by the report column headers."""
        return dict(zip(REPORT_FIELDS, self.as_tuple()))

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.group_display_name, self.member_display_name, self.member_upn)


@dataclass
class Report:
    """Sorted membership report plus the header figures shown in the HTML."""
    rows: list[ReportRow] = field(default_factory=list)
    matched_group_count: int = 0
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def generated_label(self) -> str:
        return self.generated_at.strftime("%Y-%m-%d %H:%M:%S UTC")
