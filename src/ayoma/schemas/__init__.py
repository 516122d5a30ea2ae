# src/ayoma/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import MessageResponse
from .post import (
    CommentCreate,
    CommentCreateResponse,
    CommentResponse,
    LikeResponse,
    PostCreateResponse,
    PostResponse,
)
from .user import (
    AuthResponse,
    FollowResponse,
    LoginRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UserPublic,
    UserSummary,
)

__all__ = [
    "MessageResponse",
    "CommentCreate", "CommentCreateResponse", "CommentResponse",
    "LikeResponse", "PostCreateResponse", "PostResponse",
    "AuthResponse", "FollowResponse", "LoginRequest", "ProfileUpdateResponse",
    "RegisterRequest", "UserPublic", "UserSummary",
]
