"""Validation rules for user fields.

Every create and update request passes through these checks before the
store is touched. Two entry points report failures differently:

- ``validate_user_data`` stops at the first failing field (name, then
  email, then age) and raises a single-message error.
- ``collect_violations`` / ``validate_user_data_all`` check every field
  and report all failures as a field-to-message mapping.

The per-field ``*_violation`` functions are shared by both entry points
and by the HTTP request schema.
"""

import re

from userdir.domain.user.exceptions import InvalidUserDataError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
AGE_MIN = 0
AGE_MAX = 150

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

NAME_BLANK = "Name must not be blank"
NAME_LENGTH = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
EMAIL_BLANK = "Email must not be blank"
EMAIL_FORMAT = "Invalid email format"
AGE_NEGATIVE = "Age must not be negative"
AGE_TOO_LARGE = f"Age must not exceed {AGE_MAX}"


def name_violation(name: str | None) -> str | None:
    """Return the failure message for ``name``, or None when it is valid."""
    if name is None or not name.strip():
        return NAME_BLANK
    if not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        return NAME_LENGTH
    return None


def email_violation(email: str | None) -> str | None:
    """Return the failure message for ``email``, or None when it is valid."""
    if email is None or not email.strip():
        return EMAIL_BLANK
    if not EMAIL_PATTERN.match(email.strip()):
        return EMAIL_FORMAT
    return None


def age_violation(age: int | None) -> str | None:
    """Return the failure message for ``age``, or None when it is valid."""
    if age is None:
        return None
    if age < AGE_MIN:
        return AGE_NEGATIVE
    if age > AGE_MAX:
        return AGE_TOO_LARGE
    return None


def _violations(name, email, age):
    yield "name", name_violation(name)
    yield "email", email_violation(email)
    yield "age", age_violation(age)


def validate_user_data(name: str | None, email: str | None, age: int | None) -> None:
    """Fail-fast validation.

    Raises
    ------
    InvalidUserDataError
        For the first failing field, in the order name, email, age.
    """
    for field, message in _violations(name, email, age):
        if message is not None:
            raise InvalidUserDataError.for_field(field, message)


def collect_violations(
    name: str | None,
    email: str | None,
    age: int | None,
) -> dict[str, str]:
    """Collect-all validation. Returns an empty dict when every field is valid."""
    return {
        field: message
        for field, message in _violations(name, email, age)
        if message is not None
    }


def validate_user_data_all(
    name: str | None,
    email: str | None,
    age: int | None,
) -> None:
    """Raise one InvalidUserDataError carrying every failing field."""
    errors = collect_violations(name, email, age)
    if errors:
        raise InvalidUserDataError.for_fields(errors)
