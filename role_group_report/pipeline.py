"""
Report pipeline — authenticate, locate, filter, enumerate, assemble, write.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx

from .auth import CredentialProvider, establish_session
from .collectors import enumerate_members, filter_by_suffix, locate_groups
from .config import AppConfig, ReportConfig
from .graph import DirectoryService, GraphDirectory
from .models import Report
from .reporting import assemble_report, render_console_table, write_report_files
from .safety import SafetyGuardian

logger = logging.getLogger("role_group_report.pipeline")


def build_report(
    directory: DirectoryService,
    report_config: ReportConfig,
    generated_at: Optional[datetime] = None,
) -> Report:
    """Query the directory and assemble the sorted membership report."""
    groups = locate_groups(directory, report_config.prefix)
    role_groups = filter_by_suffix(groups, report_config.suffixes)
    logger.info(
        f"{len(role_groups)} of {len(groups)} groups end with "
        f"{', '.join(report_config.suffixes)}"
    )
    rows = enumerate_members(directory, role_groups)
    return assemble_report(rows, len(role_groups), generated_at)


def run(
    config: AppConfig,
    provider: CredentialProvider,
    guardian: Optional[SafetyGuardian] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[Report, list[Path]]:
    """
    Execute one full report run.

    Nothing is written until every directory query has succeeded, so an
    authentication or query failure leaves the output directory untouched.
    """
    print("\n🔐 Authenticating...")
    session = establish_session(provider, guardian=guardian, transport=transport)
    print("✅ Authentication successful.")

    print(f"\n🔎 Querying groups starting with '{config.report.prefix}'...")
    with session as client:
        report = build_report(
            GraphDirectory(client),
            config.report,
            generated_at=config.output.generated_at,
        )
        logger.debug(f"Graph client stats: {client.get_stats()}")

    print(f"  Groups matched: {report.matched_group_count}, Rows: {report.row_count}\n")
    print(render_console_table(report))

    paths = write_report_files(report, config.output, config.report.prefix)
    return report, paths
