"""
Read handlers for the `honeybadger://` resources.

Unlike tools, resource reads do not convert failures into results: errors are
logged and re-raised so the host sees the read fail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Tuple

from .context import HoneybadgerContext
from .formatting import (
    format_fault,
    format_faults_list,
    format_notices_list,
    format_project,
    format_projects_list,
)
from .resolver import parse_project_id

log = logging.getLogger("honeybadger_mcp.resources")

SCHEME = "honeybadger://"
MIME_TYPE = "text/plain"


def _project_id(project_id: str) -> int:
    parsed = parse_project_id(project_id)
    if parsed is None:
        raise ValueError("Invalid project ID")
    return parsed


def _project_and_fault_ids(project_id: str, fault_id: str) -> Tuple[int, int]:
    pid = parse_project_id(project_id)
    fid = parse_project_id(fault_id)
    if pid is None or fid is None:
        raise ValueError("Invalid project or fault ID")
    return pid, fid


async def read_projects(ctx: HoneybadgerContext) -> str:
    try:
        projects = await ctx.api.list_projects()
    except Exception as exc:
        log.error(
            "Error fetching projects: %s", exc, extra={"uri": f"{SCHEME}projects"}
        )
        raise
    return format_projects_list(projects)


async def read_project(ctx: HoneybadgerContext, project_id: str) -> str:
    pid = _project_id(project_id)
    try:
        project = await ctx.api.get_project(pid)
    except Exception as exc:
        log.error(
            "Error fetching project %s: %s", pid, exc, extra={"project_id": pid}
        )
        raise
    return format_project(project)


async def read_project_faults(ctx: HoneybadgerContext, project_id: str) -> str:
    pid = _project_id(project_id)
    try:
        faults = await ctx.api.list_faults(pid)
    except Exception as exc:
        log.error(
            "Error fetching faults for project %s: %s",
            pid,
            exc,
            extra={"project_id": pid},
        )
        raise
    return format_faults_list(faults)


async def read_fault(ctx: HoneybadgerContext, project_id: str, fault_id: str) -> str:
    pid, fid = _project_and_fault_ids(project_id, fault_id)
    try:
        fault = await ctx.api.get_fault(pid, fid)
    except Exception as exc:
        log.error(
            "Error fetching fault %s for project %s: %s",
            fid,
            pid,
            exc,
            extra={"project_id": pid, "fault_id": fid},
        )
        raise
    return format_fault(fault)


async def read_fault_notices(
    ctx: HoneybadgerContext, project_id: str, fault_id: str
) -> str:
    pid, fid = _project_and_fault_ids(project_id, fault_id)
    try:
        notices = await ctx.api.list_notices(pid, fid)
    except Exception as exc:
        log.error(
            "Error fetching notices for fault %s in project %s: %s",
            fid,
            pid,
            exc,
            extra={"project_id": pid, "fault_id": fid},
        )
        raise
    return format_notices_list(notices)


# --- Default project (only registered when HONEYBADGER_PROJECT_ID is set) ---


def _default_project_id(ctx: HoneybadgerContext) -> int:
    if ctx.default_project_id is None:
        raise ValueError("No default project configured")
    return ctx.default_project_id


async def read_default_project(ctx: HoneybadgerContext) -> str:
    pid = _default_project_id(ctx)
    try:
        project = await ctx.api.get_project(pid)
    except Exception as exc:
        log.error(
            "Error fetching default project: %s", exc, extra={"project_id": pid}
        )
        raise
    return format_project(
        project,
        title="Default Project",
        hint=(
            f"You can use this project ID ({project.id}) for searching faults "
            "and accessing error details without needing to specify it every "
            "time."
        ),
    )


async def read_default_project_faults(ctx: HoneybadgerContext) -> str:
    pid = _default_project_id(ctx)
    try:
        faults = await ctx.api.list_faults(pid)
    except Exception as exc:
        log.error(
            "Error fetching faults for default project: %s",
            exc,
            extra={"project_id": pid},
        )
        raise
    return format_faults_list(faults, title=f"Faults in Default Project (ID: {pid})")


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    uri: str
    handler: Callable[..., Awaitable[str]]
    description: str
    default_project_only: bool = False


RESOURCES: List[ResourceSpec] = [
    ResourceSpec(
        "projects",
        f"{SCHEME}projects",
        read_projects,
        "All Honeybadger projects visible to the API token.",
    ),
    ResourceSpec(
        "project",
        f"{SCHEME}projects/{{project_id}}",
        read_project,
        "A single project.",
    ),
    ResourceSpec(
        "project-faults",
        f"{SCHEME}projects/{{project_id}}/faults",
        read_project_faults,
        "Faults reported in a project.",
    ),
    ResourceSpec(
        "fault",
        f"{SCHEME}projects/{{project_id}}/faults/{{fault_id}}",
        read_fault,
        "A single fault.",
    ),
    ResourceSpec(
        "notices",
        f"{SCHEME}projects/{{project_id}}/faults/{{fault_id}}/notices",
        read_fault_notices,
        "Recent notices (occurrences) of a fault, with backtraces.",
    ),
    ResourceSpec(
        "default-project",
        f"{SCHEME}default-project",
        read_default_project,
        "The project configured by HONEYBADGER_PROJECT_ID.",
        default_project_only=True,
    ),
    ResourceSpec(
        "default-project-faults",
        f"{SCHEME}default-project/faults",
        read_default_project_faults,
        "Faults in the project configured by HONEYBADGER_PROJECT_ID.",
        default_project_only=True,
    ),
]


def resources_for(ctx: HoneybadgerContext) -> List[ResourceSpec]:
    """Resources exposed for this context (default-project ones only if set)."""
    return [
        spec
        for spec in RESOURCES
        if not spec.default_project_only or ctx.default_project_id is not None
    ]


__all__ = [
    "MIME_TYPE",
    "RESOURCES",
    "ResourceSpec",
    "resources_for",
    "read_projects",
    "read_project",
    "read_project_faults",
    "read_fault",
    "read_fault_notices",
    "read_default_project",
    "read_default_project_faults",
]
