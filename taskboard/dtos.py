"""Request and response shapes for the taskboard HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from .models import User


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    email: StrictStr
    password: StrictStr


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime


class ErrorResponse(BaseModel):
    message: str


class TaskCreateRequest(BaseModel):
    """Body accepted when a client creates a task."""

    model_config = ConfigDict(extra="ignore")

    title: StrictStr = Field(..., min_length=1)
    completed: Optional[StrictBool] = None


class TaskCreate(BaseModel):
    """A task ready to be persisted for its owning user."""

    title: StrictStr = Field(..., min_length=1)
    completed: Optional[StrictBool] = None
    user_id: StrictInt


class TaskUpdate(BaseModel):
    """Partial update for a task; omitted fields are left untouched."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[StrictStr] = Field(default=None, min_length=1)
    completed: Optional[StrictBool] = None


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


__all__ = [
    "ErrorResponse",
    "TaskCreate",
    "TaskCreateRequest",
    "TaskUpdate",
    "UserCreateRequest",
    "UserResponse",
    "user_to_response",
]
