"""Tests for the Graph client: pagination, headers, error mapping, read-only guard."""

import httpx
import pytest

from role_group_report.graph import GraphAPIError, GraphClient, QueryError
from role_group_report.safety import SafetyGuardian, SafetyViolation
from tests.conftest import FakeGraph, user


def _client(transport, token="tok"):
    return GraphClient(access_token=token, transport=transport)


def test_get_all_pages_follows_next_links():
    members = [user(f"u{i}", f"user{i}") for i in range(5)]
    graph = FakeGraph({"ClobbaAgents": ("g1", members)}, page_size=2)

    with _client(graph.transport) as client:
        items = client.get_all_pages(
            "groups/g1/members/microsoft.graph.user", params={"$select": "id,displayName"}
        )

    assert [i["id"] for i in items] == ["u0", "u1", "u2", "u3", "u4"]
    assert len(graph.requests) == 3


def test_first_request_carries_page_size_and_headers():
    graph = FakeGraph({"ClobbaAgents": ("g1", [])})

    with _client(graph.transport, token="secret") as client:
        client.get_all_pages("groups", params={"$filter": "startswith(displayName,'Clobba')"})

    request = graph.requests[0]
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["ConsistencyLevel"] == "eventual"
    assert request.url.params["$top"] == "999"
    assert str(request.url).startswith("https://graph.microsoft.com/v1.0/groups")


def test_error_response_raises_graph_api_error():
    transport = httpx.MockTransport(
        lambda r: httpx.Response(403, json={"error": {"message": "Insufficient privileges"}})
    )

    with _client(transport) as client:
        with pytest.raises(GraphAPIError) as exc_info:
            client.get_all_pages("groups")

    assert exc_info.value.status_code == 403
    assert "Insufficient privileges" in str(exc_info.value)
    assert isinstance(exc_info.value, QueryError)


def test_transport_failure_raises_query_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(httpx.MockTransport(handler)) as client:
        with pytest.raises(QueryError, match="ConnectError"):
            client.get("groups")


def test_non_json_success_body_is_an_error():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, content=b"<html>proxy</html>"))

    with _client(transport) as client:
        with pytest.raises(GraphAPIError):
            client.get("groups")


def test_client_requires_context_manager():
    client = _client(httpx.MockTransport(lambda r: httpx.Response(200, json={})))
    with pytest.raises(RuntimeError):
        client.get("groups")


def test_no_retry_on_throttling():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, headers={"Retry-After": "1"}, json={"error": {"message": "Too many"}})

    with _client(httpx.MockTransport(handler)) as client:
        with pytest.raises(GraphAPIError):
            client.get("groups")

    assert len(calls) == 1


def test_guardian_allows_reads_and_blocks_writes():
    guardian = SafetyGuardian()

    assert guardian.validate_request("GET", "https://graph.microsoft.com/v1.0/groups")
    with pytest.raises(SafetyViolation):
        guardian.validate_request("DELETE", "https://graph.microsoft.com/v1.0/groups/g1")

    record = guardian.get_audit_record()
    assert record["checks_performed"] == 2
    assert record["violations_detected"] == 1
    assert record["status"] == "VIOLATIONS_DETECTED"


def test_pagination_cap_raises_instead_of_truncating(monkeypatch):
    monkeypatch.setattr("role_group_report.graph.client.MAX_PAGES_PER_ENDPOINT", 2)
    members = [user(f"u{i}", f"user{i}") for i in range(5)]
    graph = FakeGraph({"ClobbaAgents": ("g1", members)}, page_size=1)

    with _client(graph.transport) as client:
        with pytest.raises(QueryError, match="Pagination safety cap"):
            client.get_all_pages("groups/g1/members/microsoft.graph.user")

    assert len(graph.requests) == 2
