from __future__ import annotations

import pytest

from taskboard.dtos import TaskCreate
from taskboard.validation import (
    ValidationIssue,
    validate_payload,
    validate_task_create,
    validate_task_update,
    validate_user_create,
)


def test_valid_user_payload() -> None:
    body, issues = validate_user_create({"name": "Ana", "email": "ana@x.com", "password": "p1", "extra": 1})

    assert issues == []
    assert body is not None
    assert (body.name, body.email, body.password) == ("Ana", "ana@x.com", "p1")


def test_missing_user_fields_are_listed() -> None:
    body, issues = validate_user_create({})

    assert body is None
    assert issues == [
        ValidationIssue("name", "name is required"),
        ValidationIssue("email", "email is required"),
        ValidationIssue("password", "password is required"),
    ]


@pytest.mark.parametrize("payload", [None, "ana", 3, ["Ana"]])
def test_non_object_payloads(payload: object) -> None:
    body, issues = validate_user_create(payload)
    assert body is None
    assert [issue.field for issue in issues] == ["body"]


def test_task_create_requires_non_empty_title() -> None:
    body, issues = validate_task_create({"title": ""})
    assert body is None
    assert [issue.field for issue in issues] == ["title"]

    body, issues = validate_task_create({"title": "Write report"})
    assert issues == []
    assert body is not None
    assert body.completed is None


def test_task_create_completed_must_be_boolean() -> None:
    body, issues = validate_task_create({"title": "Write report", "completed": "yes"})
    assert body is None
    assert [issue.field for issue in issues] == ["completed"]


def test_task_update_fields_are_optional() -> None:
    body, issues = validate_task_update({})
    assert issues == []
    assert body is not None
    assert body.title is None and body.completed is None

    body, issues = validate_task_update({"title": "", "completed": True})
    assert body is None
    assert [issue.field for issue in issues] == ["title"]


def test_task_create_carries_owner() -> None:
    body, issues = validate_payload(TaskCreate, {"title": "Write report", "user_id": 7})
    assert issues == []
    assert body is not None and body.user_id == 7

    body, issues = validate_payload(TaskCreate, {"title": "Write report"})
    assert body is None
    assert issues[0].to_dict() == {"field": "user_id", "message": "user_id is required"}


def test_empty_user_strings_pass_presence_checks() -> None:
    body, issues = validate_user_create({"name": "", "email": "", "password": ""})

    assert issues == []
    assert body is not None
    assert (body.name, body.email, body.password) == ("", "", "")
