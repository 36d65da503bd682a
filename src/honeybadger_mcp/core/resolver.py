from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from .api import HoneybadgerApi
from .models import Project

log = logging.getLogger("honeybadger_mcp.resolver")

_DECIMAL_ID_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_project_id(value: str) -> Optional[int]:
    """Return the decimal integer spelled by `value`, or None."""
    if not _DECIMAL_ID_RE.match(value or ""):
        return None
    return int(value)


class ProjectResolver:
    """
    Maps a user-supplied project name or numeric id to a Project.

    Projects are cached for the lifetime of the resolver under two keys,
    str(id) and name.lower(). Entries are never evicted, so renames upstream
    are not seen by a long-running process until `clear()` is called.
    """

    def __init__(self, api: HoneybadgerApi):
        self.api = api
        self._cache: Dict[str, Project] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def cached(self, key: str) -> Optional[Project]:
        return self._cache.get(key)

    def clear(self) -> None:
        self._cache.clear()

    def _remember(self, project: Project) -> None:
        for key in project.cache_keys:
            self._cache[key] = project

    async def resolve(self, name_or_id: str) -> Optional[Project]:
        """
        Resolve by id first, then by case-insensitive exact name.

        A failed id lookup is logged and falls through to the name search.
        Returns None when nothing matches; only a failing project list fetch
        raises.
        """
        project_id = parse_project_id(name_or_id)

        if project_id is not None:
            cached = self._cache.get(str(project_id))
            if cached is not None:
                return cached
            try:
                project = await self.api.get_project(project_id)
            except Exception as exc:
                log.error("Error fetching project with ID %s: %s", project_id, exc)
            else:
                self._remember(project)
                return project

        normalized = name_or_id.lower()
        cached = self._cache.get(normalized)
        if cached is not None:
            return cached

        projects = await self.api.list_projects()
        for project in projects:
            self._remember(project)

        match: Optional[Project] = None
        for project in projects:
            if project.name is not None and project.name.lower() == normalized:
                match = project
        return match


__all__ = ["ProjectResolver", "parse_project_id"]
