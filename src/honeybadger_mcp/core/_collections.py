"""
Shared helpers for decoding Honeybadger list envelopes.

List endpoints have been seen answering in three shapes:
  - a bare JSON array
  - {"results": [...]}
  - {"projects": [...]}
Anything else is "unrecognized" and callers decide how to degrade.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

EnvelopeKind = Literal["array", "results", "projects", "unrecognized"]


@dataclass(frozen=True)
class ListEnvelope:
    kind: EnvelopeKind
    items: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def recognized(self) -> bool:
        return self.kind != "unrecognized"


def _records(elements: List[Any]) -> List[Dict[str, Any]]:
    return [e for e in elements if isinstance(e, dict)]


def decode_list_envelope(payload: Any) -> ListEnvelope:
    """Classify a list payload into one of the known envelope shapes."""
    if isinstance(payload, list):
        return ListEnvelope("array", _records(payload))
    if isinstance(payload, dict):
        if isinstance(payload.get("results"), list):
            return ListEnvelope("results", _records(payload["results"]))
        if isinstance(payload.get("projects"), list):
            return ListEnvelope("projects", _records(payload["projects"]))
    return ListEnvelope("unrecognized")


def results_elements(payload: Any) -> List[Dict[str, Any]]:
    """
    Extract the `results` list from a {"results": [...]} payload.
    A missing or malformed `results` key yields an empty list.
    """
    if not isinstance(payload, dict):
        return []
    results = payload.get("results")
    if not isinstance(results, list):
        return []
    return _records(results)


__all__ = ["EnvelopeKind", "ListEnvelope", "decode_list_envelope", "results_elements"]
