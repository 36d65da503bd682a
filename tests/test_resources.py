import logging

import pytest
import respx
from httpx import Response
from honeybadger_mcp.core.client import HoneybadgerHTTPError
from honeybadger_mcp.core.config import EnvConfig
from honeybadger_mcp.core.context import create_context
from honeybadger_mcp.core.resources import (
    read_default_project,
    read_default_project_faults,
    read_fault,
    read_fault_notices,
    read_project,
    read_project_faults,
    read_projects,
    resources_for,
)

BASE = "https://app.honeybadger.io/v2"

FAULT = {
    "id": 77,
    "project_id": 5,
    "klass": "KeyError",
    "message": "key not found: :sku",
    "environment": "production",
    "resolved": True,
    "notices_count": 2,
    "tags": ["checkout", "p1"],
    "assignee": {"id": 3, "name": "Bob", "email": "bob@example.com"},
    "url": "https://app.honeybadger.io/projects/5/faults/77",
}


@pytest.fixture
def ctx():
    return create_context(EnvConfig(api_token="tok"))


@pytest.fixture
def ctx_with_default():
    return create_context(EnvConfig(api_token="tok", default_project_id="5"))


def test_default_project_resources_only_when_configured(ctx, ctx_with_default):
    names = [r.name for r in resources_for(ctx)]
    assert names == ["projects", "project", "project-faults", "fault", "notices"]

    names = [r.name for r in resources_for(ctx_with_default)]
    assert "default-project" in names
    assert "default-project-faults" in names


@pytest.mark.asyncio
@respx.mock
async def test_read_projects(ctx):
    respx.get(f"{BASE}/projects").mock(
        return_value=Response(
            200,
            json=[
                {
                    "id": 5,
                    "name": "Storefront",
                    "fault_count": 4,
                    "unresolved_fault_count": 1,
                    "environments": ["production"],
                }
            ],
        )
    )

    async with ctx.client:
        text = await read_projects(ctx)

    assert text.startswith("# Honeybadger Projects\n\n## Storefront (ID: 5)")
    assert "- Last error: Never" in text


@pytest.mark.asyncio
async def test_read_project_invalid_id_fails_before_network(ctx):
    async with respx.mock(assert_all_called=False) as router:
        route = router.route(url__startswith=BASE).mock(
            return_value=Response(200, json={})
        )

        with pytest.raises(ValueError, match="Invalid project ID"):
            await read_project(ctx, "abc")
        with pytest.raises(ValueError, match="Invalid project or fault ID"):
            await read_fault(ctx, "5", "x")

        assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_read_project(ctx):
    respx.get(f"{BASE}/projects/5").mock(
        return_value=Response(200, json={"id": 5, "name": "Storefront", "active": False})
    )

    async with ctx.client:
        text = await read_project(ctx, "5")

    assert text.startswith("# Project: Storefront (ID: 5)")
    assert "- Active: No" in text


@pytest.mark.asyncio
@respx.mock
async def test_read_fault_errors_propagate(ctx, caplog):
    respx.get(f"{BASE}/projects/5/faults/77").mock(
        return_value=Response(404, text="Not found")
    )

    with caplog.at_level(logging.ERROR, logger="honeybadger_mcp.resources"):
        async with ctx.client:
            with pytest.raises(HoneybadgerHTTPError):
                await read_fault(ctx, "5", "77")

    record = next(r for r in caplog.records if r.name == "honeybadger_mcp.resources")
    assert record.project_id == 5
    assert record.fault_id == 77


@pytest.mark.asyncio
@respx.mock
async def test_read_fault(ctx):
    respx.get(f"{BASE}/projects/5/faults/77").mock(
        return_value=Response(200, json=FAULT)
    )

    async with ctx.client:
        text = await read_fault(ctx, "5", "77")

    assert text.startswith("# Fault: KeyError: key not found: :sku (ID: 77)")
    assert "- Status: Resolved\n" in text
    assert "- Component: N/A" in text
    assert "- Assigned to: Bob (bob@example.com)" in text
    assert "- Tags: checkout, p1" in text


@pytest.mark.asyncio
@respx.mock
async def test_read_project_faults(ctx):
    respx.get(f"{BASE}/projects/5/faults").mock(
        return_value=Response(200, json={"results": [FAULT]})
    )

    async with ctx.client:
        text = await read_project_faults(ctx, "5")

    assert text.startswith("# Faults\n\n## KeyError")
    assert "- Assigned to: Bob\n" in text


@pytest.mark.asyncio
@respx.mock
async def test_read_fault_notices(ctx):
    respx.get(f"{BASE}/projects/5/faults/77/notices").mock(
        return_value=Response(
            200,
            json={
                "results": [
                    {
                        "id": "n-1",
                        "message": "boom",
                        "request": {"url": None},
                        "backtrace": [
                            {"file": "a.rb", "number": "1", "method": "x"},
                            {"file": "b.rb", "number": "2", "method": "y"},
                        ],
                    },
                    {"id": "n-2", "backtrace": None},
                ]
            },
        )
    )

    async with ctx.client:
        text = await read_fault_notices(ctx, "5", "77")

    assert "## Notice: n-1" in text
    assert "- URL: N/A" in text
    assert "- Backtrace:\n  - a.rb:1 in x\n  - b.rb:2 in y\n" in text
    assert "- No backtrace available" in text


@pytest.mark.asyncio
@respx.mock
async def test_read_default_project_resources(ctx_with_default):
    respx.get(f"{BASE}/projects/5").mock(
        return_value=Response(200, json={"id": 5, "name": "Storefront"})
    )
    respx.get(f"{BASE}/projects/5/faults").mock(
        return_value=Response(200, json={"results": [FAULT]})
    )

    async with ctx_with_default.client:
        info = await read_default_project(ctx_with_default)
        faults = await read_default_project_faults(ctx_with_default)

    assert info.startswith("# Default Project: Storefront (ID: 5)")
    assert "without needing to specify it every time" in info
    assert faults.startswith("# Faults in Default Project (ID: 5)")


@pytest.mark.asyncio
async def test_default_project_resource_without_default_raises(ctx):
    with pytest.raises(ValueError):
        await read_default_project(ctx)
