"""
Authentication module — Delegated, human-in-the-loop sign-in only.
Uses MSAL for token acquisition against Microsoft Identity Platform.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import msal

from ..config import AuthConfig

logger = logging.getLogger("role_group_report.auth")


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class CredentialProvider(ABC):
    """Source of delegated access tokens for Microsoft Graph."""

    @abstractmethod
    def acquire_token(self, scopes: list[str]) -> str:
        """Return an access token for scopes or raise AuthenticationError."""


def _token_from_result(result: Optional[dict[str, Any]], flow_name: str) -> str:
    """Extract the access token from an MSAL result dict."""
    if result and result.get("access_token"):
        return result["access_token"]
    result = result or {}
    error = result.get("error_description", result.get("error", "Unknown"))
    raise AuthenticationError(f"{flow_name} auth failed: {error}")


class MsalCredentialProvider(CredentialProvider):
    """
    Acquires delegated tokens through an MSAL public client.
    Supports:
      - Interactive browser sign-in (default)
      - Device code flow, for terminals without a local browser
    """

    def __init__(self, config: AuthConfig, app: Optional[msal.PublicClientApplication] = None):
        self.config = config
        self._app = app

    @property
    def app(self) -> msal.PublicClientApplication:
        if self._app is None:
            self._app = msal.PublicClientApplication(
                client_id=self.config.client_id,
                authority=self.config.authority,
            )
        return self._app

    def acquire_token(self, scopes: list[str]) -> str:
        """Acquire an access token based on configured auth mode."""
        if self.config.mode == "interactive":
            return self._acquire_interactive_token(scopes)
        elif self.config.mode == "device_code":
            return self._acquire_device_code_token(scopes)
        else:
            raise AuthenticationError(f"Unknown auth mode: {self.config.mode}")

    def _acquire_interactive_token(self, scopes: list[str]) -> str:
        """Acquire token by opening the system browser."""
        logger.info("Opening browser for interactive sign-in...")
        print("  A browser window will open. Sign in and consent to:")
        for scope in scopes:
            print(f"    • {scope}")

        result = self.app.acquire_token_interactive(
            scopes=scopes,
            prompt="select_account",
        )
        token = _token_from_result(result, "Interactive")
        logger.info("Interactive authentication successful.")
        return token

    def _acquire_device_code_token(self, scopes: list[str]) -> str:
        """Acquire token using the device code flow."""
        logger.info("Initiating device code authentication flow...")

        flow = self.app.initiate_device_flow(scopes=scopes)
        if "user_code" not in flow:
            raise AuthenticationError(
                f"Device code flow failed: {flow.get('error_description', 'Unknown')}"
            )

        print(f"\n{'='*60}")
        print(f"  To sign in, open: {flow['verification_uri']}")
        print(f"  Enter code: {flow['user_code']}")
        print(f"{'='*60}\n")

        result = self.app.acquire_token_by_device_flow(flow)
        token = _token_from_result(result, "Device code")
        logger.info("Device code authentication successful.")
        return token

