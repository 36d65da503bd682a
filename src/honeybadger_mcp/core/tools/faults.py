from __future__ import annotations

import logging
from typing import Dict, Optional

from mcp.types import CallToolResult

from honeybadger_mcp.core.context import HoneybadgerContext
from honeybadger_mcp.core.formatting import format_backtraces, format_search_results
from honeybadger_mcp.core.tools._results import (
    error_result,
    project_not_found,
    text_result,
)

log = logging.getLogger("honeybadger_mcp.tools.faults")

MAX_SEARCH_LIMIT = 100
MAX_BACKTRACE_NOTICES = 10
DEFAULT_BACKTRACE_NOTICES = 1


def _check_range(name: str, value: Optional[int], upper: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if not 1 <= value <= upper:
        raise ValueError(f"{name} must be between 1 and {upper}")


def build_search_params(
    query: Optional[str] = None,
    environment: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, str]:
    """
    Build the fault-search filter map.
    `environment` is folded into `q` unless the query already names one.
    """
    params: Dict[str, str] = {}
    terms = []
    if query:
        terms.append(query.strip())
    if environment and not (query and "environment:" in query):
        terms.append(f"environment:{environment.strip()}")
    q = " ".join(t for t in terms if t)
    if q:
        params["q"] = q
    if limit is not None:
        params["limit"] = str(limit)
    return params


async def search_faults(
    ctx: HoneybadgerContext,
    project_name_or_id: str,
    query: Optional[str] = None,
    environment: Optional[str] = None,
    limit: Optional[int] = None,
) -> CallToolResult:
    """
    Search faults (errors) in a Honeybadger project.

    query: search syntax, e.g. "is:unresolved environment:production"
    environment: filter by environment, e.g. "production"
    limit: maximum number of results (1-100)
    """
    try:
        _check_range("limit", limit, MAX_SEARCH_LIMIT)

        project = await ctx.resolver.resolve(project_name_or_id)
        if project is None:
            return project_not_found(project_name_or_id)

        params = build_search_params(query, environment, limit)
        faults = await ctx.api.list_faults(project.id, params)
        return text_result(format_search_results(faults, project))
    except Exception as exc:
        log.error("Error searching faults: %s", exc, extra={"tool": "search_faults"})
        return error_result(f"Error searching faults: {exc}")


async def get_backtrace(
    ctx: HoneybadgerContext,
    project_name_or_id: str,
    fault_id: int,
    limit: Optional[int] = None,
) -> CallToolResult:
    """
    Get the backtrace of the most recent notices for a fault.

    limit: number of notices to include (1-10, default 1)
    """
    try:
        if isinstance(fault_id, bool) or not isinstance(fault_id, int) or fault_id < 1:
            raise ValueError("fault_id must be a positive integer")
        _check_range("limit", limit, MAX_BACKTRACE_NOTICES)

        project = await ctx.resolver.resolve(project_name_or_id)
        if project is None:
            return project_not_found(project_name_or_id)

        fault = await ctx.api.get_fault(project.id, fault_id)
        notice_limit = limit or DEFAULT_BACKTRACE_NOTICES
        notices = await ctx.api.list_notices(
            project.id, fault_id, {"limit": str(notice_limit)}
        )

        if not notices:
            return text_result(
                f"No notices found for fault ID {fault_id} in project "
                f'"{project.name}" (ID: {project.id}).'
            )

        return text_result(format_backtraces(fault, notices, project))
    except Exception as exc:
        log.error("Error getting backtrace: %s", exc, extra={"tool": "get_backtrace"})
        return error_result(f"Error getting backtrace: {exc}")
