"""Pydantic schemas for API request/response models."""

from userdir.presentation.api.schemas.common import ErrorResponse, HealthResponse
from userdir.presentation.api.schemas.users import (
    Link,
    UserRequest,
    UserResource,
    UserResponse,
)

__all__ = [
    # Common schemas
    "ErrorResponse",
    "HealthResponse",
    # User schemas
    "Link",
    "UserRequest",
    "UserResource",
    "UserResponse",
]
