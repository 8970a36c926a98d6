"""
Graph API client with pagination and read-only safety enforcement.
Synchronous and sequential: every call blocks until Graph answers or errors.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

import httpx

from ..config import (
    GRAPH_BASE_URL,
    GRAPH_API_VERSION,
    DEFAULT_PAGE_SIZE,
    MAX_PAGES_PER_ENDPOINT,
    REQUEST_TIMEOUT_SECONDS,
    CONNECT_TIMEOUT_SECONDS,
)
from ..safety.guardian import SafetyGuardian

logger = logging.getLogger("role_group_report.graph")


class QueryError(Exception):
    """Raised when a directory query fails (network or API)."""
    pass


class GraphAPIError(QueryError):
    """Raised when Graph API returns an error response."""
    def __init__(self, status_code: int, message: str, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Graph API Error {status_code} for {url}: {message}")


class GraphClient:
    """
    Microsoft Graph API client bound to one access token.
    Features:
      - Safety-validated requests (read-only enforcement)
      - Automatic pagination with @odata.nextLink
      - Context-managed connection pool
    No retries: the first failure is raised as a QueryError.
    """

    def __init__(
        self,
        access_token: str,
        guardian: Optional[SafetyGuardian] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.access_token = access_token
        self.guardian = guardian or SafetyGuardian()
        self._transport = transport
        self._request_count = 0
        self._client: Optional[httpx.Client] = None

    def __enter__(self):
        self._client = httpx.Client(
            timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS, connect=CONNECT_TIMEOUT_SECONDS),
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.access_token}",
                "Accept": "application/json",
                "ConsistencyLevel": "eventual",  # Required for the member type cast with $count
            },
        )
        return self

    def __exit__(self, *args):
        if self._client:
            self._client.close()
            self._client = None

    def _build_url(self, endpoint: str) -> str:
        """Build full Graph URL from relative endpoint."""
        if endpoint.startswith("http"):
            return endpoint
        endpoint = endpoint.lstrip("/")
        return f"{GRAPH_BASE_URL}/{GRAPH_API_VERSION}/{endpoint}"

    def get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """Execute a single GET request."""
        url = self._build_url(endpoint)
        self.guardian.validate_request("GET", url)
        return self._execute("GET", url, params=params)

    def get_all_pages(self, endpoint: str, params: Optional[dict] = None) -> list[dict]:
        """Fetch all pages of a paginated endpoint into a list."""
        return list(self.get_all_pages_stream(endpoint, params))

    def get_all_pages_stream(
        self,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> Iterator[dict]:
        """
        Yield every item of a paginated endpoint, following @odata.nextLink
        until Graph stops returning one.
        """
        params = dict(params or {})
        params.setdefault("$top", str(DEFAULT_PAGE_SIZE))

        url: Optional[str] = self._build_url(endpoint)
        pages = 0

        while url and pages < MAX_PAGES_PER_ENDPOINT:
            self.guardian.validate_request("GET", url)
            data = self._execute("GET", url, params=params)

            for item in data.get("value", []):
                yield item

            # nextLink already carries every query parameter
            url = data.get("@odata.nextLink")
            params = None
            pages += 1

        if url:
            raise QueryError(
                f"Pagination safety cap reached ({MAX_PAGES_PER_ENDPOINT} pages) "
                f"for endpoint: {endpoint}; refusing to return a partial result"
            )

    def _execute(self, method: str, url: str, params: Optional[dict] = None) -> dict:
        """Execute a request and decode the JSON body, raising QueryError on failure."""
        if not self._client:
            raise RuntimeError("GraphClient not initialized. Use 'with' context.")

        try:
            response = self._client.request(method, url, params=params)
        except httpx.HTTPError as e:
            raise QueryError(f"Request to {url} failed: {type(e).__name__}: {e}") from e
        self._request_count += 1
        logger.debug(f"{method} {response.request.url} -> {response.status_code}")

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise GraphAPIError(200, "Response body is not valid JSON", url) from e

        try:
            error_body = response.json() if response.content else {}
        except ValueError:
            error_body = {}
        error_msg = (error_body.get("error") or {}).get("message") or response.text[:200]
        raise GraphAPIError(response.status_code, error_msg, url)

    def get_stats(self) -> dict:
        """Return client statistics."""
        return {"total_requests": self._request_count}
