from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Endpoints that take HTTP Basic credentials instead of a bearer token
BASIC_AUTH_ENDPOINTS = {
    ("POST", "/api/v1/auth/register"),
    ("POST", "/api/v1/auth/login"),
}

PUBLIC_ENDPOINTS = {
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="LearnHub API",
            version="0.1.0",
            summary="E-learning platform: accounts, profiles and courses",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Token returned by login or register",
            },
            "BasicAuth": {
                "type": "http",
                "scheme": "basic",
                "description": "Email and password, used to register and log in",
            },
        }

        # Bearer everywhere, overridden below
        openapi_schema["security"] = [{"BearerAuth": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                key = (method.upper(), path)
                if key in BASIC_AUTH_ENDPOINTS:
                    operation["security"] = [{"BasicAuth": []}]
                elif key in PUBLIC_ENDPOINTS:
                    operation["security"] = []

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
                {"message": "Invalid credentials", "type": "authentication_error"},
                {"message": "Course not found", "type": "not_found"},
                {"message": "Profile already exists. Use PATCH to update", "type": "conflict"},
            ]
        }
    }
