"""Session tracking and statistics endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from meetstats.core.modules.session.models import Session
from meetstats.core.modules.session.validators import require_iso_string, validate_user_id
from meetstats.core.modules.stats.models import UserStats
from meetstats.web.deps import AppDep
from meetstats.web.openapi import ErrorResponse

IsoDatetime = Annotated[datetime, BeforeValidator(require_iso_string)]

router: APIRouter = APIRouter(tags=["sessions"])


class CreateSessionRequest(BaseModel):
    """Request to start a new session."""

    user_id: str = Field(..., description="Per-installation identifier (UUID v4)")
    start_time: IsoDatetime = Field(..., description="ISO-8601 start timestamp (naive values are UTC)")
    end_time: IsoDatetime = Field(..., description="ISO-8601 end timestamp, not earlier than start_time")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "user_id": "3f1c9a52-8d1e-4b7a-9c2f-5e6d7a8b9c0d",
                    "start_time": "2024-06-01T10:00:00Z",
                    "end_time": "2024-06-01T10:00:00Z",
                }
            ]
        },
    )

    @field_validator("user_id")
    @classmethod
    def check_user_id(cls, value: str) -> str:
        return validate_user_id(value)


class UpdateSessionRequest(BaseModel):
    """Request to extend or close a session."""

    end_time: IsoDatetime = Field(..., description="New ISO-8601 end timestamp, not earlier than the stored start_time")

    model_config = ConfigDict(extra="forbid")


@router.post(
    "/sessions",
    summary="Create session",
    description="Start a new session. The server assigns the id; end_time is usually equal to start_time.",
    operation_id="createSession",
    status_code=201,
    responses={
        201: {"description": "Session created successfully"},
        400: {"model": ErrorResponse, "description": "Malformed body or end_time before start_time"},
    },
)
async def create_session(request: CreateSessionRequest, app: AppDep) -> Session:
    return await app.create_session(request.user_id, request.start_time, request.end_time)


@router.put(
    "/sessions/{session_id}",
    summary="Extend or close session",
    description="Set a new end_time on an existing session. Used both while a meeting continues and when it ends.",
    operation_id="updateSession",
    responses={
        200: {"description": "Session updated successfully"},
        400: {"model": ErrorResponse, "description": "Malformed body or end_time before the stored start_time"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def update_session(session_id: str, request: UpdateSessionRequest, app: AppDep) -> Session:
    return await app.update_session(session_id, request.end_time)


@router.get(
    "/sessions/user/{user_id}",
    summary="Get user statistics",
    description=(
        "Aggregate all sessions of a user: totals, this month and this year (UTC), "
        "per-day histogram and the 10 most recent sessions. Durations are in milliseconds. "
        "Unknown users get the empty statistics shape."
    ),
    operation_id="getUserStats",
    responses={
        200: {"description": "Aggregated statistics"},
    },
)
async def get_user_stats(user_id: str, app: AppDep) -> UserStats:
    return await app.get_user_stats(user_id)
