"""Explicit per-process handle tying the client, accessors and resolver together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .api import HoneybadgerApi
from .client import HoneybadgerClient
from .config import API_TOKEN_ENV, EnvConfig, load_env_config
from .resolver import ProjectResolver, parse_project_id

log = logging.getLogger("honeybadger_mcp.context")


class MissingApiTokenError(ValueError):
    """Raised when the API token is required but missing."""


@dataclass(frozen=True)
class HoneybadgerContext:
    client: HoneybadgerClient
    api: HoneybadgerApi
    resolver: ProjectResolver
    default_project_id: Optional[int] = None

    async def aclose(self) -> None:
        await self.client.aclose()


def create_context(
    config: EnvConfig, *, client: Optional[HoneybadgerClient] = None
) -> HoneybadgerContext:
    if client is None:
        if not config.api_token:
            raise MissingApiTokenError(
                f"{API_TOKEN_ENV} environment variable is required."
            )
        client = HoneybadgerClient(
            api_token=config.api_token, base_url=config.base_url
        )

    default_project_id = None
    if config.default_project_id is not None:
        default_project_id = parse_project_id(config.default_project_id)
        if default_project_id is None:
            log.warning(
                "Ignoring non-numeric default project id %r",
                config.default_project_id,
            )

    api = HoneybadgerApi(client)
    return HoneybadgerContext(
        client=client,
        api=api,
        resolver=ProjectResolver(api),
        default_project_id=default_project_id,
    )


def seed_from_env(*, use_dotenv: bool = False) -> HoneybadgerContext:
    return create_context(load_env_config(use_dotenv=use_dotenv))


__all__ = [
    "HoneybadgerContext",
    "MissingApiTokenError",
    "create_context",
    "seed_from_env",
]
