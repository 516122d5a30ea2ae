# src/ayoma/models/__init__.py
"""Record models persisted in the JSON datastore."""

from .base import new_id
from .post import Comment, Post
from .user import User

__all__ = ["Comment", "Post", "User", "new_id"]
