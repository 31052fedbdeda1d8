"""User domain - manages user records.

This domain handles:
- User aggregate (name, email, optional age, creation timestamp)
- Field validation rules (fail-fast and collect-all)
- Lifecycle change events

Design notes:
- User ID is an integer assigned by the store on first save
- Email is unique across all users
- Repository interface defined here, implementation in infrastructure
"""

from userdir.domain.user.aggregates import User
from userdir.domain.user.events import UserEvent, UserEventType
from userdir.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidUserDataError,
    UserNotFoundError,
)
from userdir.domain.user.repositories import UserRepository
from userdir.domain.user.validation import (
    collect_violations,
    validate_user_data,
    validate_user_data_all,
)

__all__ = [
    "EmailAlreadyExistsError",
    "InvalidUserDataError",
    "User",
    "UserEvent",
    "UserEventType",
    "UserNotFoundError",
    "UserRepository",
    "collect_violations",
    "validate_user_data",
    "validate_user_data_all",
]
