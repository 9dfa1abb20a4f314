from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from tabsession.core.modules.session.models import SESSION_COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="TabSession API",
            version="0.1.0",
            summary="Session-authenticated user profile API",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "96-character session token, renewed by the server while in use",
            },
        }
        openapi_schema["security"] = [{"SessionCookie": []}]

        # Remove security from public endpoints
        public_endpoints = {
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    status_code: int = Field(..., description="HTTP status code")
    name: str = Field(..., description="Machine-readable error name")
    message: str = Field(..., description="Human-readable error message")
    action: str = Field(..., description="What the client can do about it")
    error_id: str = Field(..., description="Unique ID of this error occurrence")
    request_id: str = Field(..., description="Unique ID of the request")
    error_location_code: str = Field(..., description="Identifier of the check that failed")
    key: str | None = Field(None, description="Offending input field, for validation errors")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status_code": 400,
                    "name": "ValidationError",
                    "message": '"session_id" deve possuir 96 caracteres.',
                    "action": "Ajuste os dados enviados e tente novamente.",
                    "error_id": "0b0d1f0e-4f3a-4c6e-9d7e-2f6f1c2a9b11",
                    "request_id": "5a3c7f42-1a0e-4e38-8f21-7f2a0d6c4e55",
                    "error_location_code": "MODEL:VALIDATOR:FINAL_SCHEMA",
                    "key": "session_id",
                },
            ]
        }
    }
