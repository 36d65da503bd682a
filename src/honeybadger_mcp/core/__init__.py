"""Core domain surface for honeybadger-mcp (transport-agnostic)."""

from .api import HoneybadgerApi
from .client import (
    DEFAULT_BASE_URL,
    HoneybadgerClient,
    HoneybadgerClientError,
    HoneybadgerHTTPError,
    HoneybadgerParseError,
    ReadOnlyViolationError,
)
from .config import EnvConfig, load_env_config
from .context import (
    HoneybadgerContext,
    MissingApiTokenError,
    create_context,
    seed_from_env,
)
from .models import AffectedUser, BacktraceFrame, Fault, Notice, Project
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
    register_prompts,
    register_resources,
)
from .resolver import ProjectResolver, parse_project_id

__all__ = [
    # Client
    "DEFAULT_BASE_URL",
    "HoneybadgerClient",
    # Exceptions
    "HoneybadgerClientError",
    "HoneybadgerHTTPError",
    "HoneybadgerParseError",
    "ReadOnlyViolationError",
    "MissingApiTokenError",
    # Domain
    "HoneybadgerApi",
    "ProjectResolver",
    "parse_project_id",
    "Project",
    "Fault",
    "Notice",
    "BacktraceFrame",
    "AffectedUser",
    # Config helpers
    "EnvConfig",
    "load_env_config",
    # Context
    "HoneybadgerContext",
    "create_context",
    "seed_from_env",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "register_resources",
    "register_prompts",
]
