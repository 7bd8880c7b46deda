from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="MeetStats API",
            version="0.1.0",
            summary="Google Meet session tracking and statistics",
            routes=app.routes,
        )

        # FastAPI documents 422 for body validation; this API answers 400 instead
        for path_item in openapi_schema["paths"].values():
            for operation in path_item.values():
                operation.get("responses", {}).pop("422", None)

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "end_time must be greater than or equal to start_time", "type": "validation_error"},
                {"message": "Session not found", "type": "not_found"},
            ]
        }
    }
