"""User-related Pydantic schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from ayoma.models import User

from .common import ApiModel, MessageResponse


class RegisterRequest(ApiModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(ApiModel):
    """Schema for login submissions; ``identifier`` is a username or an email."""

    identifier: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserPublic(ApiModel):
    """User fields safe to return to clients (never the password hash)."""

    id: str
    username: str
    email: str
    profile_pic: str
    bio: str
    followers: list[str]
    following: list[str]
    posts_count: int


class UserSummary(ApiModel):
    """Compact user entry used for friend suggestions."""

    id: str
    username: str
    profile_pic: str
    bio: str
    followers_count: int
    following_count: int
    posts_count: int

    @classmethod
    def from_user(cls, user: User) -> UserSummary:
        return cls(
            id=user.id,
            username=user.username,
            profile_pic=user.profile_pic,
            bio=user.bio,
            followers_count=len(user.followers),
            following_count=len(user.following),
            posts_count=user.posts_count,
        )


class AuthResponse(MessageResponse):
    """Response returned after registration or login."""

    token: str = Field(..., description="Bearer token valid for one hour")
    user: UserPublic


class ProfileUpdateResponse(MessageResponse):
    user: UserPublic


class FollowResponse(MessageResponse):
    """Outcome of a follow toggle."""

    action: Literal["followed", "unfollowed"]
    new_followers_count: int = Field(..., description="Follower count of the target user")
