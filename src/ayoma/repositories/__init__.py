"""Typed access to the records of one open transaction."""

from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = ["PostRepository", "UserRepository"]
