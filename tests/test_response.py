"""Tests for the JSON response envelope."""

from __future__ import annotations

import json

import pytest

from slimpath.agent.response import create_response, error_response
from slimpath.tracking.models import (
    BadRequestError,
    DependencyFailure,
    NotFoundError,
    ValidationError,
)


def test_success_envelope():
    response = create_response("tracking show", data={"current_week": 2}, human_summary="Week 2")
    data = json.loads(response.to_json())

    assert data["success"] is True
    assert data["command"] == "tracking show"
    assert data["data"] == {"current_week": 2}
    assert data["errors"] == []
    assert "timestamp" in data
    assert "error_kind" not in data


@pytest.mark.parametrize(
    "error, kind",
    [
        (ValidationError("bad age", field="age"), "validation"),
        (BadRequestError("no height", field="height"), "bad_request"),
        (NotFoundError("missing"), "not_found"),
        (DependencyFailure("Tracking update failed"), "dependency"),
    ],
)
def test_error_kinds(error, kind):
    data = error_response("tracking update", error).to_dict()

    assert data["success"] is False
    assert data["error_kind"] == kind
    assert data["errors"] == [str(error)]


def test_error_field():
    data = error_response("tracking init", ValidationError("bad", field="age")).to_dict()
    assert data["error_field"] == "age"


def test_plain_message():
    response = error_response("user show", "Something broke", ["Try again"])

    assert response.error_kind == "error"
    assert response.suggestions == ["Try again"]
    assert response.human_summary == "Error: Something broke"
