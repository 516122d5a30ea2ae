"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import ApiModel, MessageResponse


class CommentCreate(ApiModel):
    """Schema for adding a comment."""

    content: str = Field(..., description="Comment text, must not be blank")


class CommentResponse(ApiModel):
    id: str
    user_id: str
    username: str
    content: str
    timestamp: datetime


class PostResponse(ApiModel):
    """Schema for post information returned by the API."""

    id: str
    author_id: str
    author_name: str
    author_profile_pic: str
    content: str | None
    media_url: str | None
    timestamp: datetime
    likes: list[str]
    comments: list[CommentResponse]
    comments_count: int


class PostCreateResponse(MessageResponse):
    post: PostResponse


class LikeResponse(MessageResponse):
    new_likes_count: int
    liked: bool


class CommentCreateResponse(MessageResponse):
    comment: CommentResponse
