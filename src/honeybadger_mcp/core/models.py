from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


# upstream sometimes sends null where a list is expected
StrList = Annotated[List[str], BeforeValidator(_none_as_empty)]


class HoneybadgerModel(BaseModel):
    """
    Base model for Honeybadger API records.
    Records are snapshots of upstream state:
      - frozen once validated
      - unknown upstream fields are kept (extra="allow")
      - every field has a default so an empty payload (HTTP 204) still
        validates and absent fields simply read as None
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# --- Nested references ---


class Person(HoneybadgerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None


class Team(HoneybadgerModel):
    id: Optional[int] = None
    name: Optional[str] = None


class BacktraceFrame(HoneybadgerModel):
    file: Optional[str] = None
    number: Optional[str] = None
    method: Optional[str] = None


class NoticeRequest(HoneybadgerModel):
    url: Optional[str] = None
    component: Optional[str] = None
    action: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    session: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None


# --- Core entities ---


class Project(HoneybadgerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    fault_count: Optional[int] = None
    unresolved_fault_count: Optional[int] = None
    environments: StrList = Field(default_factory=list)
    token: Optional[str] = None
    active: Optional[bool] = None
    created_at: Optional[str] = None
    earliest_notice_at: Optional[str] = None
    last_notice_at: Optional[str] = None
    owner: Optional[Person] = None
    teams: Annotated[List[Team], BeforeValidator(_none_as_empty)] = Field(
        default_factory=list
    )

    @property
    def cache_keys(self) -> List[str]:
        """Keys this project is cached under: str(id) and the lowercased name."""
        keys: List[str] = []
        if self.id is not None:
            keys.append(str(self.id))
        if self.name is not None:
            keys.append(self.name.lower())
        return keys


class Fault(HoneybadgerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    klass: Optional[str] = None
    message: Optional[str] = None
    environment: Optional[str] = None
    component: Optional[str] = None
    action: Optional[str] = None
    resolved: Optional[bool] = None
    ignored: Optional[bool] = None
    notices_count: Optional[int] = None
    created_at: Optional[str] = None
    last_notice_at: Optional[str] = None
    assignee: Optional[Person] = None
    tags: StrList = Field(default_factory=list)
    url: Optional[str] = None

    @property
    def status_label(self) -> str:
        return "Resolved" if self.resolved else "Unresolved"


class Notice(HoneybadgerModel):
    id: Optional[str] = None
    fault_id: Optional[int] = None
    message: Optional[str] = None
    created_at: Optional[str] = None
    request: Optional[NoticeRequest] = None
    # innermost-first, exactly as upstream sends it
    backtrace: Annotated[
        List[BacktraceFrame], BeforeValidator(_none_as_empty)
    ] = Field(default_factory=list)


class AffectedUser(HoneybadgerModel):
    user: Optional[str] = None
    count: int = 0


__all__ = [
    "HoneybadgerModel",
    "Person",
    "Team",
    "BacktraceFrame",
    "NoticeRequest",
    "Project",
    "Fault",
    "Notice",
    "AffectedUser",
]
