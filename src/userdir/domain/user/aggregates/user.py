"""User aggregate."""

from datetime import datetime

from userdir.domain.shared.time import utc_now


class User:
    """
    User aggregate root.

    The identifier is assigned by the store on first save; a freshly
    created user has ``id`` None until it has been persisted. ``id`` and
    ``created_at`` never change after that.
    """

    def __init__(
        self,
        name: str,
        email: str,
        age: int | None = None,
        id: int | None = None,
        created_at: datetime | None = None,
    ):
        self._id = id
        self._name = name
        self._email = email
        self._age = age
        self._created_at = created_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def age(self) -> int | None:
        return self._age

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_persisted(self) -> bool:
        return self._id is not None

    def change_details(self, name: str, email: str, age: int | None) -> None:
        """Replace the mutable fields, keeping id and created_at."""
        self._name = name.strip()
        self._email = email.strip()
        self._age = age

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        age: int | None = None,
    ) -> "User":
        return cls(name=name.strip(), email=email.strip(), age=age)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        name: str,
        email: str,
        age: int | None,
        created_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            name=name,
            email=email,
            age=age,
            created_at=created_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, name={self._name!r}, email={self._email})"
