"""
Tool namespace for Honeybadger MCP.

Every public coroutine in these modules whose first parameter is `ctx` is
discovered and registered as an MCP tool by `honeybadger_mcp.core.registry`.
"""

from .faults import get_backtrace, search_faults
from .projects import find_project

__all__ = [
    "find_project",
    "search_faults",
    "get_backtrace",
]
