from __future__ import annotations

import asyncio
import logging
import sys

from honeybadger_mcp.core.config import load_env_config
from honeybadger_mcp.core.context import MissingApiTokenError, create_context
from honeybadger_mcp.core.logging import setup_logging
from honeybadger_mcp.server import build_app

log = logging.getLogger("honeybadger_mcp.stdio")


async def main() -> None:
    config = load_env_config(use_dotenv=True)
    setup_logging(config.log_level)

    ctx = create_context(config)
    app = build_app(ctx)

    log.info("Starting Honeybadger MCP server")
    try:
        await app.run_stdio_async()
    finally:
        await ctx.aclose()


def run() -> None:
    """Console entry point; exits non-zero when the API token is missing."""
    try:
        asyncio.run(main())
    except MissingApiTokenError as exc:
        log.error("Error: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
