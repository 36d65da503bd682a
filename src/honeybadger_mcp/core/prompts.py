from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from .context import HoneybadgerContext
from .formatting import format_error_analysis_prompt, format_fault_summary_prompt
from .models import Fault, Project
from .resolver import parse_project_id

log = logging.getLogger("honeybadger_mcp.prompts")

PROMPT_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "analyze_error": {
        "name": "analyze_error",
        "description": "Analyze an error and suggest fixes",
        "arguments": [
            {
                "name": "project_name_or_id",
                "description": "The name or ID of the project containing the error",
                "required": True,
            },
            {
                "name": "fault_id",
                "description": "The ID of the fault/error to analyze",
                "required": True,
            },
        ],
    },
    "summarize_fault": {
        "name": "summarize_fault",
        "description": "Provide a concise summary of an error",
        "arguments": [
            {
                "name": "project_name_or_id",
                "description": "The name or ID of the project containing the error",
                "required": True,
            },
            {
                "name": "fault_id",
                "description": "The ID of the fault/error to summarize",
                "required": True,
            },
        ],
    },
}


def _user_message(text: str) -> List[Dict[str, Any]]:
    return [{"role": "user", "content": {"type": "text", "text": text}}]


async def _load_fault(
    ctx: HoneybadgerContext, project_name_or_id: str, fault_id: str
) -> Tuple[Project, Fault, int]:
    project = await ctx.resolver.resolve(project_name_or_id)
    if project is None:
        raise ValueError(
            f'Project "{project_name_or_id}" not found. '
            "Please check the name or ID."
        )
    fid = parse_project_id(str(fault_id))
    if fid is None:
        raise ValueError("Invalid fault ID")
    fault = await ctx.api.get_fault(project.id, fid)
    return project, fault, fid


async def analyze_error(
    ctx: HoneybadgerContext, project_name_or_id: str, fault_id: str
) -> List[Dict[str, Any]]:
    """Analyze an error and suggest fixes."""
    try:
        project, fault, fid = await _load_fault(ctx, project_name_or_id, fault_id)
        notices = await ctx.api.list_notices(project.id, fid, {"limit": "1"})
    except Exception as exc:
        log.error(
            "Error generating analyze error prompt: %s",
            exc,
            extra={"fault_id": fault_id},
        )
        raise
    notice = notices[0] if notices else None
    return _user_message(format_error_analysis_prompt(fault, notice, project))


async def summarize_fault(
    ctx: HoneybadgerContext, project_name_or_id: str, fault_id: str
) -> List[Dict[str, Any]]:
    """Provide a concise summary of an error."""
    try:
        project, fault, _ = await _load_fault(ctx, project_name_or_id, fault_id)
    except Exception as exc:
        log.error(
            "Error generating summarize fault prompt: %s",
            exc,
            extra={"fault_id": fault_id},
        )
        raise
    return _user_message(format_fault_summary_prompt(fault, project))


PROMPTS = {
    "analyze_error": analyze_error,
    "summarize_fault": summarize_fault,
}


__all__ = ["PROMPT_DEFINITIONS", "PROMPTS", "analyze_error", "summarize_fault"]
