from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from honeybadger_mcp.core.context import HoneybadgerContext
from honeybadger_mcp.core.registry import (
    register_discovered_tools,
    register_prompts,
    register_resources,
)

SERVER_NAME = "honeybadger-mcp"


def build_app(ctx: HoneybadgerContext) -> FastMCP:
    """Create the FastMCP app with every tool, resource and prompt bound to ctx."""
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, ctx)
    register_resources(app, ctx)
    register_prompts(app, ctx)
    return app
