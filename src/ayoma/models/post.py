# src/ayoma/models/post.py
"""Posts and their comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import RecordModel


class Comment(RecordModel):
    """Immutable comment; ``username`` is the author's name when it was written."""

    id: str
    user_id: str
    username: str
    content: str
    timestamp: datetime


class Post(RecordModel):
    """A post in the feed.

    ``author_name`` and ``author_profile_pic`` snapshot the author at creation
    time and are not refreshed afterwards. ``comments_count`` mirrors
    ``len(comments)``.
    """

    id: str
    author_id: str
    author_name: str
    author_profile_pic: str
    content: str | None = None
    media_url: str | None = None
    timestamp: datetime
    likes: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    comments_count: int = 0

    @property
    def likes_count(self) -> int:
        return len(self.likes)
