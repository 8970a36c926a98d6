"""
Safety Guardian — Enforces strict read-only operation.
Validates all HTTP methods, blocks write attempts, and logs safety events.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

logger = logging.getLogger("role_group_report.safety")

READ_METHODS = {"GET", "HEAD", "OPTIONS"}


class SafetyViolation(Exception):
    """Raised when a write operation is attempted."""
    pass


class SafetyGuardian:
    """
    Validates every outbound HTTP request to ensure read-only operation.
    Keeps an audit list of the violations it blocked.
    """

    def __init__(self):
        self.violations: list[dict] = []
        self.checks_performed: int = 0
        self.started_at: str = datetime.now(timezone.utc).isoformat()

    def validate_request(self, method: str, url: str) -> bool:
        """
        Validate that a request is read-only.
        Returns True if safe, raises SafetyViolation if not.
        """
        self.checks_performed += 1
        method_upper = method.upper()

        if method_upper in READ_METHODS:
            return True

        self._record_violation(method_upper, url, "Write HTTP method blocked")
        raise SafetyViolation(
            f"SAFETY VIOLATION: Write method blocked: {method_upper} {url}"
        )

    def _record_violation(self, method: str, url: str, reason: str):
        violation = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "method": method,
            "url": url,
            "reason": reason,
        }
        self.violations.append(violation)
        logger.critical(f"SAFETY VIOLATION: {reason} — {method} {url}")

    def get_audit_record(self) -> dict:
        """Return the safety audit record for this run."""
        return {
            "mode": "READ-ONLY",
            "started_at": self.started_at,
            "checks_performed": self.checks_performed,
            "violations_detected": len(self.violations),
            "status": "CLEAN" if not self.violations else "VIOLATIONS_DETECTED",
        }

    @staticmethod
    def print_banner():
        """Print the read-only warning banner."""
        # Box-drawing only on a UTF-8 terminal; piped output gets ASCII.
        enc = getattr(sys.stdout, "encoding", "") or ""
        unicode_ok = (
            sys.stdout.isatty()
            and enc.lower().replace("-", "") in ("utf8", "utf16", "utf32")
        )

        if unicode_ok:
            banner = """
╔═════════════════════════════════════════════════════════════════╗
║   ROLE GROUP MEMBERSHIP REPORT — READ-ONLY, NO CHANGES MADE     ║
║   * Delegated scopes: Group.Read.All, User.Read.All             ║
║   * Every Graph request is validated before execution           ║
╚═════════════════════════════════════════════════════════════════╝
"""
            try:
                print(banner)
                return
            except UnicodeEncodeError:
                pass  # fall through to ASCII banner

        print("=" * 67)
        print("  ROLE GROUP MEMBERSHIP REPORT -- READ-ONLY, NO CHANGES MADE")
        print("  * Delegated scopes: Group.Read.All, User.Read.All")
        print("=" * 67)
