"""Data access helpers for working with users."""
from __future__ import annotations

from ayoma.db.store import Record
from ayoma.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around the mutable user records of a transaction."""

    def __init__(self, records: list[Record]) -> None:
        """Initialize the repository with a collection loaded by the store."""
        self.records = records

    def all(self) -> list[User]:
        """Return every user in storage order."""
        return [User.model_validate(record) for record in self.records]

    def _index_of(self, user_id: str) -> int | None:
        for index, record in enumerate(self.records):
            if record.get("id") == user_id:
                return index
        return None

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        index = self._index_of(user_id)
        if index is None:
            return None
        return User.model_validate(self.records[index])

    def find_by_identifier(self, identifier: str) -> User | None:
        """Return the first user whose username or email equals ``identifier``."""
        for record in self.records:
            if record.get("username") == identifier or record.get("email") == identifier:
                return User.model_validate(record)
        return None

    def field_taken(self, field: str, value: str) -> bool:
        """Return True if any user has ``value`` in ``field`` (exact match)."""
        return any(record.get(field) == value for record in self.records)

    def add(self, user: User) -> User:
        """Append a new user."""
        self.records.append(user.to_record())
        return user

    def save(self, user: User) -> User:
        """Replace the stored record of an existing user.

        Raises:
            KeyError: If the user is not part of the collection.
        """
        index = self._index_of(user.id)
        if index is None:
            raise KeyError(user.id)
        self.records[index] = user.to_record()
        return user
