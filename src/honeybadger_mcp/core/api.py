from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, urlencode

from .client import HoneybadgerClient
from ._collections import decode_list_envelope, results_elements
from .models import AffectedUser, Fault, Notice, Project

log = logging.getLogger("honeybadger_mcp.api")


def _query_string(params: Optional[Mapping[str, str]]) -> str:
    """Encode a flat filter map as `?k=v&...` (empty string when no filters)."""
    if not params:
        return ""
    return "?" + urlencode({k: str(v) for k, v in params.items()}, quote_via=quote)


class HoneybadgerApi:
    """
    Typed, read-only accessors over the Honeybadger v2 API.

    Each method is a single GET through the shared client plus response-shape
    normalization. Errors from the client propagate unchanged. There are
    no update, resolve or delete operations.
    """

    def __init__(self, client: HoneybadgerClient):
        self.client = client

    async def list_projects(self) -> List[Project]:
        payload = await self.client.get("/projects", tool="projects")
        envelope = decode_list_envelope(payload)
        if not envelope.recognized:
            log.warning("Unexpected projects API response format: %r", payload)
            return []
        return [Project.model_validate(p) for p in envelope.items]

    async def get_project(self, project_id: int) -> Project:
        payload = await self.client.get(f"/projects/{project_id}", tool="projects")
        return Project.model_validate(payload)

    async def list_faults(
        self, project_id: int, params: Optional[Mapping[str, str]] = None
    ) -> List[Fault]:
        payload = await self.client.get(
            f"/projects/{project_id}/faults{_query_string(params)}", tool="faults"
        )
        return [Fault.model_validate(f) for f in results_elements(payload)]

    async def get_fault(self, project_id: int, fault_id: int) -> Fault:
        payload = await self.client.get(
            f"/projects/{project_id}/faults/{fault_id}", tool="faults"
        )
        return Fault.model_validate(payload)

    async def list_notices(
        self,
        project_id: int,
        fault_id: int,
        params: Optional[Mapping[str, str]] = None,
    ) -> List[Notice]:
        payload = await self.client.get(
            f"/projects/{project_id}/faults/{fault_id}/notices"
            f"{_query_string(params)}",
            tool="notices",
        )
        return [Notice.model_validate(n) for n in results_elements(payload)]

    async def list_affected_users(
        self, project_id: int, fault_id: int
    ) -> List[AffectedUser]:
        payload: Any = await self.client.get(
            f"/projects/{project_id}/faults/{fault_id}/affected_users",
            tool="affected_users",
        )
        # a 204 arrives as {}; only an array carries (user, count) pairs
        if not isinstance(payload, list):
            return []
        rows: List[Dict[str, Any]] = [p for p in payload if isinstance(p, dict)]
        return [AffectedUser.model_validate(r) for r in rows]


__all__ = ["HoneybadgerApi"]
