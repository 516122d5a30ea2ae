# src/ayoma/models/user.py
"""User accounts and their follow relationships."""

from __future__ import annotations

from pydantic import Field

from .base import RecordModel


class User(RecordModel):
    """A registered account.

    ``followers`` and ``following`` hold user ids and mirror each other across
    records: B is in A.following exactly when A is in B.followers.
    ``posts_count`` caches the number of posts authored by the user.
    """

    id: str
    username: str
    email: str
    password_hash: str
    profile_pic: str
    bio: str
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)
    posts_count: int = 0

    def is_following(self, user_id: str) -> bool:
        return user_id in self.following
