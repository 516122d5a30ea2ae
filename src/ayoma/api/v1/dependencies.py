"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ayoma.db.session import get_store
from ayoma.db.store import RecordStore
from ayoma.services.accounts import AccountService
from ayoma.services.content import ContentService
from ayoma.services.media import MediaStorage, get_media_storage
from ayoma.services.social_graph import SocialGraphService
from ayoma.services.tokens import TokenClaims, TokenService, get_token_service

# HTTP Bearer scheme; missing credentials are reported by get_current_claims
bearer_scheme = HTTPBearer(auto_error=False)

StoreDep = Annotated[RecordStore, Depends(get_store)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
MediaStorageDep = Annotated[MediaStorage, Depends(get_media_storage)]


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: TokenServiceDep,
) -> TokenClaims:
    """Verify the bearer token of the request.

    Args:
        credentials: HTTP Bearer token credentials, None when absent
        tokens: Token service

    Returns:
        Identity claims of the caller

    Raises:
        TokenMissingError: If no bearer token was sent (401)
        Unauthenticated: If the token is malformed, expired or forged (403)
    """
    return tokens.verify(credentials.credentials if credentials else None)


def get_account_service(store: StoreDep, tokens: TokenServiceDep) -> AccountService:
    return AccountService(store, tokens)


def get_social_graph_service(store: StoreDep) -> SocialGraphService:
    return SocialGraphService(store)


def get_content_service(store: StoreDep) -> ContentService:
    return ContentService(store)


CurrentClaimsDep = Annotated[TokenClaims, Depends(get_current_claims)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
SocialGraphServiceDep = Annotated[SocialGraphService, Depends(get_social_graph_service)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
