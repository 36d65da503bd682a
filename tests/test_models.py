import json
from pathlib import Path

import pytest
from honeybadger_mcp.core.models import AffectedUser, Fault, Notice, Project
from pydantic import ValidationError


def load_fixture(name: str) -> dict:
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def test_project_parses_fixture():
    project = Project.model_validate(load_fixture("project.json"))

    assert project.id == 130943
    assert project.environments == ["production", "staging"]
    assert project.owner.email == "ops@acme.example"
    assert [t.name for t in project.teams] == ["Platform"]
    # fields we do not model are kept
    assert project.model_extra["sites"][0]["name"] == "Homepage"


def test_project_cache_keys():
    assert Project(id=5, name="Storefront API").cache_keys == ["5", "storefront api"]
    assert Project(name="NoId").cache_keys == ["noid"]
    assert Project().cache_keys == []


def test_empty_payload_validates():
    project = Project.model_validate({})
    assert project.id is None
    assert project.environments == []
    assert project.teams == []

    fault = Fault.model_validate({})
    assert fault.tags == []
    assert fault.status_label == "Unresolved"


def test_null_lists_read_as_empty():
    project = Project.model_validate({"id": 1, "environments": None, "teams": None})
    assert project.environments == []
    assert project.teams == []

    notice = Notice.model_validate({"id": "n", "backtrace": None})
    assert notice.backtrace == []


def test_notice_parses_fixture_in_order():
    payload = load_fixture("notices.json")
    notice = Notice.model_validate(payload["results"][0])

    assert notice.fault_id == 77
    assert notice.request.component == "orders"
    assert notice.request.session is None
    assert [f.method for f in notice.backtrace] == ["total", "call"]
    assert notice.backtrace[0].number == "88"


def test_records_are_frozen():
    fault = Fault(id=1, klass="RuntimeError")
    with pytest.raises(ValidationError):
        fault.klass = "Other"


def test_fault_status_label():
    assert Fault(resolved=True).status_label == "Resolved"
    assert Fault(resolved=False, ignored=True).status_label == "Unresolved"


def test_affected_user_defaults():
    assert AffectedUser(user="ann").count == 0
