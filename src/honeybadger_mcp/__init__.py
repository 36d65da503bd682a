"""honeybadger_mcp package exports."""

from .core import (
    HoneybadgerApi,
    HoneybadgerClient,
    HoneybadgerClientError,
    HoneybadgerContext,
    HoneybadgerHTTPError,
    HoneybadgerParseError,
    ProjectResolver,
    ReadOnlyViolationError,
    create_context,
    seed_from_env,
)
from .server import build_app

__all__ = [
    # Client
    "HoneybadgerClient",
    "HoneybadgerApi",
    "ProjectResolver",
    # Exceptions
    "HoneybadgerClientError",
    "HoneybadgerHTTPError",
    "HoneybadgerParseError",
    "ReadOnlyViolationError",
    # Context
    "HoneybadgerContext",
    "create_context",
    "seed_from_env",
    # Server
    "build_app",
]
