"""
Session establishment — turns a credential provider into a Graph session.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..config import REQUIRED_PERMISSIONS, REQUIRED_SCOPES
from ..graph.client import GraphClient
from ..safety.guardian import SafetyGuardian
from .authenticator import AuthenticationError, CredentialProvider

logger = logging.getLogger("role_group_report.auth.session")


def establish_session(
    provider: CredentialProvider,
    guardian: Optional[SafetyGuardian] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> GraphClient:
    """
    Authenticate with exactly the two read-only delegated scopes and return
    the session handle. Use the returned client as a context manager.

    Raises AuthenticationError on any sign-in failure; there is no retry.
    """
    for permission, reason in REQUIRED_PERMISSIONS.items():
        logger.debug(f"Requesting {permission}: {reason}")

    try:
        token = provider.acquire_token(list(REQUIRED_SCOPES))
    except AuthenticationError:
        raise
    except Exception as e:
        # MSAL and the browser/socket layers raise their own types
        raise AuthenticationError(f"Sign-in failed: {type(e).__name__}: {e}") from e

    if not token:
        raise AuthenticationError("Sign-in returned an empty access token.")

    return GraphClient(access_token=token, guardian=guardian, transport=transport)
