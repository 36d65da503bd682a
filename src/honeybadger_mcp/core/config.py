from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL

API_TOKEN_ENV = "HONEYBADGER_API_TOKEN"
PROJECT_ID_ENV = "HONEYBADGER_PROJECT_ID"
BASE_URL_ENV = "HONEYBADGER_BASE_URL"
LOG_LEVEL_ENV = "HONEYBADGER_LOG_LEVEL"


@dataclass(frozen=True)
class EnvConfig:
    api_token: str
    base_url: str = DEFAULT_BASE_URL
    default_project_id: Optional[str] = None
    log_level: str = "INFO"


def load_env_config(*, use_dotenv: bool = True) -> EnvConfig:
    """Load Honeybadger settings from the environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return EnvConfig(
        api_token=os.getenv(API_TOKEN_ENV, "").strip(),
        base_url=os.getenv(BASE_URL_ENV, "").strip() or DEFAULT_BASE_URL,
        default_project_id=os.getenv(PROJECT_ID_ENV, "").strip() or None,
        log_level=os.getenv(LOG_LEVEL_ENV, "").strip() or "INFO",
    )


__all__ = [
    "API_TOKEN_ENV",
    "PROJECT_ID_ENV",
    "BASE_URL_ENV",
    "LOG_LEVEL_ENV",
    "EnvConfig",
    "load_env_config",
]
