"""
Configuration module for the Role Group Membership Report.
Defines tunable parameters, Graph endpoints, and output settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


# ─── Tenant Authentication ───────────────────────────────────────────────────

# Microsoft Graph Command Line Tools: first-party public client that accepts
# delegated Graph scopes without a tenant-specific app registration.
DEFAULT_CLIENT_ID = "14d82eec-204b-4c2f-b7e8-296a70dab67e"
DEFAULT_TENANT_ID = "organizations"

ENV_TENANT_ID = "ROLE_GROUP_REPORT_TENANT_ID"
ENV_CLIENT_ID = "ROLE_GROUP_REPORT_CLIENT_ID"

AUTH_MODES = ("interactive", "device_code")


@dataclass
class AuthConfig:
    """Delegated (interactive) authentication configuration."""
    tenant_id: str = ""
    client_id: str = ""
    mode: str = "interactive"  # "interactive" or "device_code"

    def __post_init__(self):
        if not self.tenant_id:
            self.tenant_id = os.environ.get(ENV_TENANT_ID, DEFAULT_TENANT_ID)
        if not self.client_id:
            self.client_id = os.environ.get(ENV_CLIENT_ID, DEFAULT_CLIENT_ID)
        self.mode = resolve_mode(self.mode)

    @property
    def authority(self) -> str:
        return f"https://login.microsoftonline.com/{self.tenant_id}"


# ─── Graph API Settings ─────────────────────────────────────────────────────

GRAPH_BASE_URL = "https://graph.microsoft.com"
GRAPH_API_VERSION = "v1.0"

# Pagination
DEFAULT_PAGE_SIZE = 999           # Maximum items per page ($top)
MAX_PAGES_PER_ENDPOINT = 10000   # Safety cap on pagination loops

REQUEST_TIMEOUT_SECONDS = 60.0
CONNECT_TIMEOUT_SECONDS = 30.0


# ─── Report Settings ────────────────────────────────────────────────────────

DEFAULT_PREFIX = "Clobba"
DEFAULT_SUFFIXES = ("Agents", "Supervisors", "Users")

# Column headers shared by the CSV and HTML outputs
REPORT_FIELDS = ["GroupDisplayName", "MemberDisplayName", "MemberUPN"]


@dataclass
class ReportConfig:
    """Which groups end up in the report."""
    prefix: str = DEFAULT_PREFIX
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES

    def __post_init__(self):
        # A bare string is one suffix, not a sequence of characters
        if isinstance(self.suffixes, str):
            self.suffixes = (self.suffixes,)
        self.suffixes = tuple(self.suffixes)


# ─── Output Configuration ───────────────────────────────────────────────────

@dataclass
class OutputConfig:
    """Output directory and file naming."""
    output_dir: str = ""
    generated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.generated_at is None:
            self.generated_at = datetime.now(timezone.utc)
        if not self.output_dir:
            self.output_dir = os.getcwd()

    @property
    def timestamp(self) -> str:
        """Filename-safe, sortable, second resolution."""
        return self.generated_at.strftime("%Y%m%d_%H%M%S")

    @property
    def base_dir(self) -> Path:
        return Path(self.output_dir)

    def report_path(self, prefix: str, extension: str) -> Path:
        return self.base_dir / f"{prefix}GroupMembers_{self.timestamp}.{extension}"

    def csv_path(self, prefix: str) -> Path:
        return self.report_path(prefix, "csv")

    def html_path(self, prefix: str) -> Path:
        return self.report_path(prefix, "html")


# ─── Master Configuration ───────────────────────────────────────────────────

@dataclass
class AppConfig:
    """Top-level configuration for a report run."""
    auth: AuthConfig = field(default_factory=AuthConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    verbose: bool = False

    @classmethod
    def from_file(cls, path: str | Path) -> "AppConfig":
        """Load configuration from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = cls()
        if "auth" in data:
            auth_data = data["auth"]
            config.auth = AuthConfig(
                tenant_id=auth_data.get("tenant_id", ""),
                client_id=auth_data.get("client_id", ""),
                mode=auth_data.get("mode", "interactive"),
            )
        if "report" in data:
            report_data = data["report"]
            config.report = ReportConfig(
                prefix=report_data.get("prefix", DEFAULT_PREFIX),
                suffixes=report_data.get("suffixes", DEFAULT_SUFFIXES),
            )
        if "output" in data:
            config.output.output_dir = data["output"].get("output_dir", "") or os.getcwd()
        config.verbose = data.get("verbose", False)
        return config


# ─── Required Graph API Permissions (Delegated, Read-Only) ───────────────

REQUIRED_PERMISSIONS = {
    "Group.Read.All": "Find role groups by display name and list their members",
    "User.Read.All": "Read member display names and user principal names",
}

REQUIRED_SCOPES = list(REQUIRED_PERMISSIONS)


def resolve_mode(mode: Optional[str]) -> str:
    """Validate an auth mode name, defaulting to interactive sign-in."""
    if not mode:
        return "interactive"
    if mode not in AUTH_MODES:
        raise ValueError(f"Unknown auth mode: {mode} (expected one of {', '.join(AUTH_MODES)})")
    return mode
