"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and uniqueness violations.
"""

from userdir.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidUserDataError(ValidationError):
    """
    Raised when user fields fail validation.

    Attributes
    ----------
    field
        Name of the first failing field (fail-fast errors only)
    field_errors
        Mapping of every failing field to its message (collect-all errors only)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        details: dict[str, str] = {}
        if field is not None:
            details["field"] = field
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR,
            details=details,
            field_errors=field_errors,
        )
        self.field = field

    @classmethod
    def for_field(cls, field: str, message: str) -> "InvalidUserDataError":
        return cls(message, field=field)

    @classmethod
    def for_fields(cls, errors: dict[str, str]) -> "InvalidUserDataError":
        return cls("Validation failed", field_errors=dict(errors))


class EmailAlreadyExistsError(ConflictError):
    """Email already belongs to another user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"User with email '{email}' already exists",
            code=ErrorCode.DUPLICATE_EMAIL,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, lookup: object, by: str = "id") -> None:
        self.lookup = lookup
        self.by = by
        super().__init__(
            f"User with {by} {lookup} not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={by: str(lookup)},
        )
