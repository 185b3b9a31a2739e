from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Notekeeper API",
            version="0.1.0",
            summary="Notes with tags, priorities, color labels, reminders and pin/archive/trash statuses",
            routes=app.routes,
        )

        openapi_schema["tags"] = [
            {"name": "notes", "description": "Create, query, update and delete notes"},
            {"name": "note-status", "description": "Pin, archive, trash, color and reminder changes"},
        ]

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
                {"message": "Note not found: 64b7f0c2a1e4d3b2c1a09f8e", "type": "not_found"},
                {"message": "Limit must be between 0 and 100", "type": "invalid_argument"},
                {"message": "Storage is temporarily unavailable.", "type": "storage_error"},
            ]
        }
    }
