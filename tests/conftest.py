"""Shared fakes: an in-memory Graph endpoint, a fake directory and a stub sign-in."""

import re

import httpx
import pytest

from role_group_report.auth import AuthenticationError, CredentialProvider
from role_group_report.graph import DirectoryService, QueryError
from role_group_report.models import Group, UserMember

USER = "#microsoft.graph.user"
DEVICE = "#microsoft.graph.device"
SERVICE_PRINCIPAL = "#microsoft.graph.servicePrincipal"

_STARTSWITH = re.compile(r"^startswith\(displayName,'(.*)'\)$")
_MEMBERS_PATH = re.compile(r"^/v1\.0/groups/([^/]+)/members/microsoft\.graph\.user$")


def user(uid, name, upn=None):
    return {
        "@odata.type": USER,
        "id": uid,
        "displayName": name,
        "userPrincipalName": upn or f"{name.lower()}@contoso.com",
        "mail": f"{name.lower()}@contoso.com",
    }


def device(did, name):
    return {"@odata.type": DEVICE, "id": did, "displayName": name}


class FakeGraph:
    """
    Serves /groups and /groups/{id}/members/microsoft.graph.user the way Graph
    does: prefix filter and user cast evaluated server side, $select honoured,
    results split into pages of page_size linked with @odata.nextLink.
    """

    def __init__(self, groups, page_size=None, failing_groups=()):
        # groups: {display name: (id, [member dicts])}
        self.groups = groups
        self.page_size = page_size
        self.failing_groups = set(failing_groups)
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params

        if path == "/v1.0/groups":
            match = _STARTSWITH.match(params.get("$filter", ""))
            if not match:
                return _error(400, "Unsupported filter")
            prefix = match.group(1).replace("''", "'")
            items = [
                {"id": gid, "displayName": name}
                for name, (gid, _) in self.groups.items()
                if name.startswith(prefix)
            ]
            return self._page(request, items)

        match = _MEMBERS_PATH.match(path)
        if match:
            group_id = match.group(1)
            if group_id in self.failing_groups:
                return _error(503, "Service unavailable")
            members = next(
                (m for gid, m in self.groups.values() if gid == group_id), None
            )
            if members is None:
                return _error(404, f"Group {group_id} not found")
            select = params.get("$select", "").split(",")
            items = [
                {k: v for k, v in m.items() if k in select}
                for m in members
                if m.get("@odata.type") == USER
            ]
            return self._page(request, items)

        return _error(404, f"No route for {path}")

    def _page(self, request, items):
        skip = int(request.url.params.get("$skiptoken", "0"))
        size = self.page_size or len(items) or 1
        body = {"value": items[skip:skip + size]}
        if skip + size < len(items):
            body["@odata.nextLink"] = str(
                request.url.copy_set_param("$skiptoken", str(skip + size))
            )
        return httpx.Response(200, json=body)

    def member_requests(self):
        return [r for r in self.requests if "/members/" in r.url.path]


def _error(status, message):
    return httpx.Response(status, json={"error": {"code": "Error", "message": message}})


class FakeDirectory(DirectoryService):
    """In-memory DirectoryService keyed by group display name."""

    def __init__(self, groups, failing_groups=()):
        self.groups = groups
        self.failing_groups = set(failing_groups)
        self.member_calls: list[str] = []

    def list_groups_by_prefix(self, prefix):
        return [
            Group(id=gid, display_name=name)
            for name, (gid, _) in self.groups.items()
            if name.startswith(prefix)
        ]

    def list_user_members(self, group_id):
        self.member_calls.append(group_id)
        if group_id in self.failing_groups:
            raise QueryError(f"members of {group_id} unavailable")
        for gid, members in self.groups.values():
            if gid == group_id:
                return [UserMember.from_graph(m) for m in members if m.get("@odata.type") == USER]
        return []


class StubCredentialProvider(CredentialProvider):
    """Hands out a fixed token, or fails like a denied consent prompt."""

    def __init__(self, token="test-token", error=None):
        self.token = token
        self.error = error
        self.requested_scopes = None

    def acquire_token(self, scopes):
        self.requested_scopes = list(scopes)
        if self.error:
            raise self.error
        return self.token


@pytest.fixture
def clobba_groups():
    return {
        "ClobbaAgents": ("g-agents", [user("u-bob", "bob"), user("u-alice", "alice")]),
        "ClobbaUsers": ("g-users", [user("u-carol", "carol")]),
        "ClobbaAdmins": ("g-admins", [user("u-dave", "dave")]),
        "OtherAgents": ("g-other", [user("u-erin", "erin")]),
    }


@pytest.fixture
def stub_provider():
    return StubCredentialProvider()


@pytest.fixture
def denied_provider():
    return StubCredentialProvider(error=AuthenticationError("Interactive auth failed: consent denied"))
