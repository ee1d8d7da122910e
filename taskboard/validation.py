"""Presence and type checks evaluated before a request reaches the services.

Validation never raises: callers receive the parsed model, or ``None`` along
with the list of issues describing what was wrong with the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .dtos import TaskCreateRequest, TaskUpdate, UserCreateRequest

ModelT = TypeVar("ModelT", bound=BaseModel)

_BODY_FIELD = "body"


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def _issue_from_error(error: Dict[str, Any]) -> ValidationIssue:
    location = ".".join(str(part) for part in error.get("loc", ())) or _BODY_FIELD
    if error.get("type") == "missing":
        return ValidationIssue(location, f"{location} is required")
    return ValidationIssue(location, str(error.get("msg", "Invalid value")))


def validate_payload(model: Type[ModelT], payload: object) -> Tuple[Optional[ModelT], List[ValidationIssue]]:
    """Validate ``payload`` against ``model``."""

    if not isinstance(payload, dict):
        return None, [ValidationIssue(_BODY_FIELD, "Request body must be a JSON object")]

    try:
        return model.model_validate(payload), []
    except ValidationError as exc:
        return None, [_issue_from_error(error) for error in exc.errors()]


def validate_user_create(payload: object) -> Tuple[Optional[UserCreateRequest], List[ValidationIssue]]:
    return validate_payload(UserCreateRequest, payload)


def validate_task_create(payload: object) -> Tuple[Optional[TaskCreateRequest], List[ValidationIssue]]:
    return validate_payload(TaskCreateRequest, payload)


def validate_task_update(payload: object) -> Tuple[Optional[TaskUpdate], List[ValidationIssue]]:
    return validate_payload(TaskUpdate, payload)


__all__ = [
    "ValidationIssue",
    "validate_payload",
    "validate_task_create",
    "validate_task_update",
    "validate_user_create",
]
