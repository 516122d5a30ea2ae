"""User profile and follow endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile

from ayoma.api.v1.dependencies import (
    AccountServiceDep,
    ContentServiceDep,
    CurrentClaimsDep,
    MediaStorageDep,
    SocialGraphServiceDep,
)
from ayoma.models import User
from ayoma.schemas.post import PostResponse
from ayoma.schemas.user import FollowResponse, ProfileUpdateResponse, UserPublic, UserSummary
from ayoma.services.media import has_file

router = APIRouter(prefix="/users", tags=["users"])


def _public(user: User) -> UserPublic:
    return UserPublic.model_validate(user.model_dump())


async def submitted_bio(request: Request) -> str | None:
    """Return the ``bio`` form field as sent, or None when it was not sent.

    A ``Form()`` parameter cannot tell an empty value from a missing one, so
    the raw form is read instead; an empty bio clears the current one.
    """
    form = await request.form()
    bio = form.get("bio")
    return bio if isinstance(bio, str) else None


@router.get("", response_model=list[UserSummary])
def list_users(claims: CurrentClaimsDep, accounts: AccountServiceDep) -> list[UserSummary]:
    """List every user with follower counts, for friend suggestions."""
    return [UserSummary.from_user(user) for user in accounts.list_users()]


@router.get("/me", response_model=UserPublic)
def get_my_profile(claims: CurrentClaimsDep, accounts: AccountServiceDep) -> UserPublic:
    """Return the profile of the authenticated user."""
    return _public(accounts.get_user(claims.user_id))


@router.put("/me", response_model=ProfileUpdateResponse)
def update_my_profile(
    claims: CurrentClaimsDep,
    accounts: AccountServiceDep,
    media: MediaStorageDep,
    bio: Annotated[str | None, Depends(submitted_bio)],
    profile_pic: Annotated[UploadFile | None, File(alias="profilePic")] = None,
) -> ProfileUpdateResponse:
    """Update the bio and/or the profile picture; omitted fields are kept."""
    picture_url = media.save(profile_pic) if has_file(profile_pic) else None
    user = accounts.update_profile(claims.user_id, bio=bio, profile_pic=picture_url)
    return ProfileUpdateResponse(message="Profile updated successfully", user=_public(user))


@router.post("/{user_id}/follow", response_model=FollowResponse)
def toggle_follow(
    user_id: str,
    claims: CurrentClaimsDep,
    graph: SocialGraphServiceDep,
) -> FollowResponse:
    """Follow the user, or unfollow if already followed.

    Raises:
        SelfReferenceError: If the caller targets itself (400)
        NotFoundError: If either user is unknown (404)
    """
    result = graph.follow(claims.user_id, user_id)
    return FollowResponse(
        message=f"User {result.action} successfully",
        action=result.action,
        new_followers_count=result.target_follower_count,
    )


@router.get("/{user_id}/posts", response_model=list[PostResponse])
def list_user_posts(
    user_id: str,
    claims: CurrentClaimsDep,
    content: ContentServiceDep,
) -> list[PostResponse]:
    """List posts written by one user, newest first."""
    return [PostResponse.model_validate(post.model_dump()) for post in content.list_by_author(user_id)]
