from __future__ import annotations

import logging

from mcp.types import CallToolResult

from honeybadger_mcp.core.context import HoneybadgerContext
from honeybadger_mcp.core.formatting import format_project
from honeybadger_mcp.core.tools._results import (
    error_result,
    project_not_found,
    text_result,
)

log = logging.getLogger("honeybadger_mcp.tools.projects")


async def find_project(ctx: HoneybadgerContext, name_or_id: str) -> CallToolResult:
    """
    Find a Honeybadger project by name (case-insensitive) or numeric ID.
    Returns the project's details, including the ID to use with other tools.
    """
    try:
        project = await ctx.resolver.resolve(name_or_id)
        if project is None:
            return project_not_found(name_or_id)

        return text_result(
            format_project(
                project,
                hint=(
                    f"You can use this project ID ({project.id}) for searching "
                    "faults and accessing error details."
                ),
            )
        )
    except Exception as exc:
        log.error("Error finding project: %s", exc, extra={"tool": "find_project"})
        return error_result(f"Error finding project: {exc}")
