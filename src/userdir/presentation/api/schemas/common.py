"""Common schemas shared across API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from userdir.domain.shared.time import utc_now


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the error occurred",
    )
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    details: dict[str, str] | None = Field(
        None,
        description="Field-to-message map, present only for validation failures",
    )
    path: str = Field(..., description="Request path")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "timestamp": "2024-01-01T12:00:00Z",
                "status": 404,
                "error": "Not Found",
                "message": "User with id 42 not found",
                "code": "USER_NOT_FOUND",
                "path": "/api/v1/users/42",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(..., description="Mounted API versions")
