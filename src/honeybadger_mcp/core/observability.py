from __future__ import annotations

import logging
from typing import Any, Dict

RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS and v is not None
    }


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Structured logging helper.
    - Emits `event` as the message with the fields attached via `extra`
      so LogfmtFormatter can render them as key=value pairs.
    - Drops reserved LogRecord attributes and None values.
    """
    log = logger or logging.getLogger("honeybadger_mcp.observability")
    log.log(level, event, extra=_clean_fields(fields))


__all__ = ["log_event"]
