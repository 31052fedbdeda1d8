"""User directory service: CRUD management of user records."""

__version__ = "1.0.0"
