"""FastAPI application exposing user registration and listing."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import anyio
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .database import Database
from .directory import UserDirectory
from .dtos import ErrorResponse, UserResponse, user_to_response
from .errors import ErrorKind, UserDirectoryError
from .validation import ValidationIssue, validate_user_create

logger = logging.getLogger("taskboard.api")

_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.DUPLICATE_USER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORE_FAILURE: status.HTTP_400_BAD_REQUEST,
}


class InvalidPayloadError(Exception):
    """Raised by a handler when the request body fails validation."""

    def __init__(self, issues: Sequence[ValidationIssue], message: str = "Invalid request payload") -> None:
        super().__init__(message)
        self.message = message
        self.issues = list(issues)


def register_user_routes(router: APIRouter, directory: UserDirectory) -> None:
    """Expose the user endpoints on ``router``."""

    @router.post(
        "/users",
        status_code=status.HTTP_201_CREATED,
        response_model=UserResponse,
        responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    )
    async def create_user(request: Request) -> UserResponse:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InvalidPayloadError(
                [ValidationIssue("body", "Request body must be valid JSON")],
                message="Request body must be valid JSON",
            ) from exc

        body, issues = validate_user_create(payload)
        if body is None:
            raise InvalidPayloadError(issues)

        user = await anyio.to_thread.run_sync(
            directory.register_user,
            body.name,
            body.email,
            body.password,
        )
        return user_to_response(user)

    @router.get("/users", response_model=List[UserResponse])
    async def list_users() -> List[UserResponse]:
        users = await anyio.to_thread.run_sync(directory.list_users)
        return [user_to_response(user) for user in users]


def create_app(
    *,
    database: Database | None = None,
    directory: UserDirectory | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application for the taskboard API."""

    if settings is None:
        settings = load_settings()

    if database is None:
        database = Database(settings.database_path)
    database.initialize()

    if directory is None:
        directory = UserDirectory(database, atomic=settings.atomic_registration)

    app = FastAPI(
        title="Taskboard API",
        description="User registration and listing for the taskboard backend",
        version="1.0.0",
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.database = database
    app.state.directory = directory

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    router = APIRouter(prefix="/api", tags=["Users"])
    register_user_routes(router, directory)
    app.include_router(router)

    @app.exception_handler(UserDirectoryError)
    async def handle_directory_error(_: object, exc: UserDirectoryError):
        status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
        if exc.kind is ErrorKind.STORE_FAILURE:
            logger.error("User store failure: %s", exc)
        return JSONResponse(status_code=status_code, content={"message": exc.message})

    @app.exception_handler(InvalidPayloadError)
    async def handle_invalid_payload(_: object, exc: InvalidPayloadError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": exc.message,
                "errors": [issue.to_dict() for issue in exc.issues],
            },
        )

    return app


__all__ = ["InvalidPayloadError", "create_app", "register_user_routes"]
