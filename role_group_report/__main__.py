"""
Role Group Membership Report — Command-line entry point

Usage:
    python -m role_group_report                              # Clobba*{Agents,Supervisors,Users}
    python -m role_group_report --prefix Contoso --suffix Agents --suffix Users
    python -m role_group_report --output-dir ./reports
    python -m role_group_report --config report.json
    python -m role_group_report --device-code               # sign in from another device

This tool is STRICTLY READ-ONLY. It will NEVER modify the directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .auth import AuthenticationError, CredentialProvider, MsalCredentialProvider
from .config import AppConfig, AuthConfig, ReportConfig
from .graph import QueryError
from .pipeline import run
from .reporting import OutputError
from .safety import SafetyGuardian, SafetyViolation

logger = logging.getLogger("role_group_report")

FATAL_ERRORS = (AuthenticationError, QueryError, OutputError, SafetyViolation)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="role_group_report",
        description="Role group membership report for license reconciliation (READ-ONLY)",
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="Group display-name prefix (default: Clobba)",
    )
    parser.add_argument(
        "--suffix",
        dest="suffixes",
        action="append",
        default=None,
        help="Accepted role suffix; repeat for several (default: Agents, Supervisors, Users)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=None,
        help="Directory for the CSV and HTML files (default: current directory)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "--tenant-id",
        type=str,
        default=None,
        help="Entra tenant ID or domain (default: organizations)",
    )
    parser.add_argument(
        "--client-id",
        type=str,
        default=None,
        help="Public client application ID used for sign-in",
    )
    parser.add_argument(
        "--device-code",
        action="store_true",
        help="Use the device code flow instead of opening a browser",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Build configuration from a config file, then apply CLI overrides."""
    if args.config:
        config = AppConfig.from_file(args.config)
    else:
        config = AppConfig()

    if args.tenant_id or args.client_id or args.device_code:
        config.auth = AuthConfig(
            tenant_id=args.tenant_id or config.auth.tenant_id,
            client_id=args.client_id or config.auth.client_id,
            mode="device_code" if args.device_code else config.auth.mode,
        )

    if args.prefix is not None or args.suffixes:
        config.report = ReportConfig(
            prefix=args.prefix if args.prefix is not None else config.report.prefix,
            suffixes=args.suffixes or config.report.suffixes,
        )

    if args.output_dir:
        config.output.output_dir = str(args.output_dir)

    config.verbose = config.verbose or args.verbose
    return config


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    # Keep token-bearing HTTP traces out of debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def configure_console():
    """Replace characters the console encoding cannot show instead of failing."""
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="replace")


def main(argv: Optional[list[str]] = None, provider: Optional[CredentialProvider] = None) -> int:
    """Run one report; returns the process exit status."""
    configure_console()
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2

    configure_logging(config.verbose)

    guardian = SafetyGuardian()
    guardian.print_banner()

    print(f"📋 Prefix:   {config.report.prefix}")
    print(f"🏷  Suffixes: {', '.join(config.report.suffixes)}")
    print(f"📂 Output:   {config.output.base_dir.resolve()}")

    if provider is None:
        provider = MsalCredentialProvider(config.auth)

    try:
        report, paths = run(config, provider, guardian=guardian)
    except FATAL_ERRORS as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    finally:
        logger.debug(f"Safety audit: {guardian.get_audit_record()}")

    print()
    csv_path, html_path = paths
    print(f"  📊 CSV:   {csv_path}")
    print(f"  🌐 HTML:  {html_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
