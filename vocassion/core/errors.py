"""
Exception hierarchy and FastAPI handlers for Vocassion.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class VocassionException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NotAuthenticatedError(VocassionException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"

    def __init__(self):
        super().__init__(message="Authentication required.")


class ResourceNotFoundError(VocassionException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    resource: str = "Resource"

    def __init__(self, resource_id: Any):
        super().__init__(
            message=f"{self.resource} {resource_id} not found.",
            details={"id": str(resource_id)},
        )


class ProfileNotFoundError(ResourceNotFoundError):
    code = "PROFILE_NOT_FOUND"
    resource = "Profile"


class GoalNotFoundError(ResourceNotFoundError):
    code = "GOAL_NOT_FOUND"
    resource = "Goal"


class SubGoalNotFoundError(ResourceNotFoundError):
    code = "SUBGOAL_NOT_FOUND"
    resource = "Sub-goal"


class MilestoneNotFoundError(ResourceNotFoundError):
    code = "MILESTONE_NOT_FOUND"
    resource = "Milestone"


class ChallengeNotFoundError(ResourceNotFoundError):
    code = "CHALLENGE_NOT_FOUND"
    resource = "Challenge"


class PostNotFoundError(ResourceNotFoundError):
    code = "POST_NOT_FOUND"
    resource = "Post"


class TeamChallengeNotFoundError(ResourceNotFoundError):
    code = "TEAM_CHALLENGE_NOT_FOUND"
    resource = "Team challenge"


class IkigaiMapNotFoundError(ResourceNotFoundError):
    code = "IKIGAI_MAP_NOT_FOUND"
    resource = "Ikigai map for user"


class InsufficientPointsError(VocassionException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "INSUFFICIENT_POINTS"

    def __init__(self, required: int, available: int):
        super().__init__(
            message=f"Insufficient points: {required} required, {available} available.",
            details={"required": required, "available": available},
        )


class GoalNotLockedError(VocassionException):
    http_status = status.HTTP_409_CONFLICT
    code = "GOAL_NOT_LOCKED"

    def __init__(self, goal_id: str, current_status: str):
        super().__init__(
            message=f"Goal {goal_id} is {current_status}, not locked.",
            details={"goal_id": goal_id, "status": current_status},
        )


class GoalLockedError(VocassionException):
    http_status = status.HTTP_409_CONFLICT
    code = "GOAL_LOCKED"

    def __init__(self, goal_id: str):
        super().__init__(
            message=f"Goal {goal_id} must be unlocked before it can progress.",
            details={"goal_id": goal_id},
        )


class ChallengeAlreadyCompletedError(VocassionException):
    http_status = status.HTTP_409_CONFLICT
    code = "CHALLENGE_ALREADY_COMPLETED"

    def __init__(self, challenge_id: str):
        super().__init__(
            message=f"Challenge {challenge_id} is already completed.",
            details={"challenge_id": challenge_id},
        )


class ReflectionAlreadySubmittedError(VocassionException):
    http_status = status.HTTP_409_CONFLICT
    code = "REFLECTION_ALREADY_SUBMITTED"

    def __init__(self, day):
        super().__init__(
            message="You have already submitted a reflection today.",
            details={"day": str(day)},
        )


class AlreadyParticipatingError(VocassionException):
    http_status = status.HTTP_409_CONFLICT
    code = "ALREADY_PARTICIPATING"

    def __init__(self, challenge_id: str):
        super().__init__(
            message=f"Already participating in team challenge {challenge_id}.",
            details={"challenge_id": challenge_id},
        )


class InvalidChoiceError(VocassionException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_CHOICE"
    field: str = "value"

    def __init__(self, value: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid {self.field}: {value}.",
            details={"field": self.field, "value": value, "allowed": allowed},
        )


class InvalidPostTypeError(InvalidChoiceError):
    code = "INVALID_POST_TYPE"
    field = "post type"


class InvalidCategoryError(InvalidChoiceError):
    code = "INVALID_CATEGORY"
    field = "category"


class InvalidSectionError(InvalidChoiceError):
    code = "INVALID_SECTION"
    field = "Ikigai section"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def vocassion_exception_handler(request: Request, exc: VocassionException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "code": "CONFLICT",
            "message": "The request conflicts with an existing record.",
        },
    )


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "code": "NOT_FOUND",
            "message": "The requested record does not exist.",
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
