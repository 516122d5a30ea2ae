"""Business logic services for the Ayoma application."""

from .accounts import AccountService
from .content import ContentService, LikeResult
from .media import MediaStorage
from .social_graph import FollowResult, SocialGraphService
from .tokens import TokenClaims, TokenService

__all__ = [
    "AccountService",
    "ContentService",
    "FollowResult",
    "LikeResult",
    "MediaStorage",
    "SocialGraphService",
    "TokenClaims",
    "TokenService",
]
