import logging

import pytest
import respx
from httpx import Response
from honeybadger_mcp.core._collections import decode_list_envelope, results_elements
from honeybadger_mcp.core.api import HoneybadgerApi
from honeybadger_mcp.core.client import HoneybadgerClient, HoneybadgerHTTPError
from honeybadger_mcp.core.models import AffectedUser, Fault, Project

BASE = "https://app.honeybadger.io/v2"

PROJECTS = [
    {"id": 1, "name": "Alpha", "environments": ["production"]},
    {"id": 2, "name": "Beta", "environments": []},
]


@pytest.fixture
def client():
    return HoneybadgerClient(api_token="tok")


@pytest.fixture
def api(client):
    return HoneybadgerApi(client)


def test_decode_list_envelope_kinds():
    assert decode_list_envelope(PROJECTS).kind == "array"
    assert decode_list_envelope({"results": PROJECTS}).kind == "results"
    assert decode_list_envelope({"projects": PROJECTS}).kind == "projects"
    assert decode_list_envelope({"data": PROJECTS}).kind == "unrecognized"
    assert decode_list_envelope("nope").kind == "unrecognized"
    assert decode_list_envelope({"results": "nope"}).kind == "unrecognized"


def test_results_elements_defaults_to_empty():
    assert results_elements({}) == []
    assert results_elements({"results": None}) == []
    assert results_elements([{"id": 1}]) == []
    assert results_elements({"results": [{"id": 1}, "junk"]}) == [{"id": 1}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [PROJECTS, {"results": PROJECTS}, {"projects": PROJECTS}],
    ids=["array", "results", "projects"],
)
@respx.mock
async def test_list_projects_normalizes_every_envelope(api, client, payload):
    respx.get(f"{BASE}/projects").mock(return_value=Response(200, json=payload))

    async with client:
        projects = await api.list_projects()

    assert [p.id for p in projects] == [1, 2]
    assert [p.name for p in projects] == ["Alpha", "Beta"]
    assert all(isinstance(p, Project) for p in projects)


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_unrecognized_shape_warns_and_returns_empty(
    api, client, caplog
):
    respx.get(f"{BASE}/projects").mock(
        return_value=Response(200, json={"data": PROJECTS})
    )

    with caplog.at_level(logging.WARNING, logger="honeybadger_mcp.api"):
        async with client:
            projects = await api.list_projects()

    assert projects == []
    assert any(
        "Unexpected projects API response format" in r.getMessage()
        for r in caplog.records
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_http_error_propagates(api, client):
    respx.get(f"{BASE}/projects").mock(return_value=Response(401, text="denied"))

    async with client:
        with pytest.raises(HoneybadgerHTTPError) as exc:
            await api.list_projects()

    assert exc.value.status_code == 401


@pytest.mark.asyncio
@respx.mock
async def test_get_project_204_is_empty_object(api, client):
    respx.get(f"{BASE}/projects/5").mock(return_value=Response(204))

    async with client:
        project = await api.get_project(5)

    assert project is not None
    assert isinstance(project, Project)
    assert project.id is None
    assert project.name is None


@pytest.mark.asyncio
@respx.mock
async def test_get_fault_204_is_empty_object(api, client):
    respx.get(f"{BASE}/projects/5/faults/9").mock(return_value=Response(204))

    async with client:
        fault = await api.get_fault(5, 9)

    assert isinstance(fault, Fault)
    assert fault.klass is None


@pytest.mark.asyncio
@respx.mock
async def test_list_faults_encodes_filters(api, client):
    route = respx.get(f"{BASE}/projects/5/faults").mock(
        return_value=Response(
            200,
            json={"results": [{"id": 10, "project_id": 5, "klass": "RuntimeError"}]},
        )
    )

    async with client:
        faults = await api.list_faults(
            5, {"q": "is:unresolved environment:production", "limit": "3"}
        )

    assert [f.id for f in faults] == [10]
    request = route.calls[0].request
    assert request.url.params["q"] == "is:unresolved environment:production"
    assert request.url.params["limit"] == "3"


@pytest.mark.asyncio
@respx.mock
async def test_list_faults_without_filters_has_no_query_string(api, client):
    route = respx.get(f"{BASE}/projects/5/faults").mock(
        return_value=Response(200, json={})
    )

    async with client:
        faults = await api.list_faults(5)

    assert faults == []
    assert route.calls[0].request.url.query == b""


@pytest.mark.asyncio
@respx.mock
async def test_list_notices_preserves_backtrace_order(api, client):
    frames = [
        {"file": "app/models/user.rb", "number": "42", "method": "save"},
        {"file": "app/controllers/users_controller.rb", "number": 7, "method": "create"},
    ]
    route = respx.get(f"{BASE}/projects/5/faults/9/notices").mock(
        return_value=Response(
            200, json={"results": [{"id": "abc-123", "backtrace": frames}]}
        )
    )

    async with client:
        notices = await api.list_notices(5, 9, {"limit": "1"})

    assert route.calls[0].request.url.params["limit"] == "1"
    assert [f.file for f in notices[0].backtrace] == [
        "app/models/user.rb",
        "app/controllers/users_controller.rb",
    ]
    # line numbers are kept as strings
    assert notices[0].backtrace[1].number == "7"


@pytest.mark.asyncio
@respx.mock
async def test_list_affected_users(api, client):
    respx.get(f"{BASE}/projects/5/faults/9/affected_users").mock(
        return_value=Response(
            200, json=[{"user": "ann@example.com", "count": 3}, {"user": "bob", "count": 1}]
        )
    )

    async with client:
        users = await api.list_affected_users(5, 9)

    assert users == [
        AffectedUser(user="ann@example.com", count=3),
        AffectedUser(user="bob", count=1),
    ]


@pytest.mark.asyncio
@respx.mock
async def test_list_affected_users_204_is_empty(api, client):
    respx.get(f"{BASE}/projects/5/faults/9/affected_users").mock(
        return_value=Response(204)
    )

    async with client:
        users = await api.list_affected_users(5, 9)

    assert users == []


def test_api_exposes_no_write_operations(api):
    for name in ("update_fault", "resolve_fault", "delete_fault", "post", "patch"):
        assert not hasattr(api, name)
