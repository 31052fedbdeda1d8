"""Request and response schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from userdir.domain.user.validation import (
    age_violation,
    email_violation,
    name_violation,
)


def _reject(error_type: str, message: str | None) -> None:
    if message is not None:
        raise PydanticCustomError(error_type, message)


class UserRequest(BaseModel):
    """Request schema for creating or updating a user.

    Every field is checked independently, so a request with several bad
    fields reports all of them at once. ``id`` and ``createdAt`` are
    assigned by the server and are not accepted here.
    """

    name: str | None = Field(
        default=None,
        validate_default=True,
        description="Full name, 2-100 characters",
        examples=["Ivan Petrov"],
    )
    email: str | None = Field(
        default=None,
        validate_default=True,
        description="Unique email address",
        examples=["ivan.petrov@example.com"],
    )
    age: StrictInt | None = Field(
        default=None,
        description="Age in years, 0-150",
        examples=[30],
    )

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str | None) -> str | None:
        _reject("invalid_name", name_violation(v))
        return v

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str | None) -> str | None:
        _reject("invalid_email", email_violation(v))
        return v

    @field_validator("age")
    @classmethod
    def _validate_age(cls, v: int | None) -> int | None:
        _reject("invalid_age", age_violation(v))
        return v


class UserResponse(BaseModel):
    """Response schema for a user record."""

    id: int
    name: str
    email: str
    age: int | None = None
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Link(BaseModel):
    """Hypermedia link."""

    href: str


class UserResource(UserResponse):
    """User record with hypermedia links to related operations."""

    links: dict[str, Link] = Field(default_factory=dict, alias="_links")
