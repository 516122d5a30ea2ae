# src/ayoma/api/v1/endpoints/posts.py
"""Post-related endpoints for the Ayoma API."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from ayoma.api.v1.dependencies import ContentServiceDep, CurrentClaimsDep, MediaStorageDep
from ayoma.core.errors import ValidationError
from ayoma.schemas.post import (
    CommentCreate,
    CommentCreateResponse,
    CommentResponse,
    LikeResponse,
    PostCreateResponse,
    PostResponse,
)
from ayoma.services.media import has_file

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
def list_feed(claims: CurrentClaimsDep, content: ContentServiceDep) -> list[PostResponse]:
    """Return the feed, newest first."""
    return [PostResponse.model_validate(post.model_dump()) for post in content.list_feed()]


@router.post("", response_model=PostCreateResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    claims: CurrentClaimsDep,
    content: ContentServiceDep,
    media: MediaStorageDep,
    text: Annotated[str | None, Form(alias="content")] = None,
    upload: Annotated[UploadFile | None, File(alias="media")] = None,
) -> PostCreateResponse:
    """Publish a post with text, an uploaded media file, or both.

    Raises:
        ValidationError: If neither text nor media is supplied (400)
        NotFoundError: If the author no longer exists (404)
    """
    if not text and not has_file(upload):
        raise ValidationError("Post content or media is required")

    media_url = media.save(upload) if has_file(upload) else None
    post = content.create_post(claims.user_id, content=text, media_url=media_url)
    return PostCreateResponse(
        message="Post created successfully",
        post=PostResponse.model_validate(post.model_dump()),
    )


@router.post("/{post_id}/like", response_model=LikeResponse)
def toggle_like(post_id: str, claims: CurrentClaimsDep, content: ContentServiceDep) -> LikeResponse:
    """Like a post, or remove the caller's like if present."""
    result = content.toggle_like(post_id, claims.user_id)
    return LikeResponse(
        message="Post liked" if result.liked else "Like removed",
        new_likes_count=result.likes_count,
        liked=result.liked,
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    claims: CurrentClaimsDep,
    content: ContentServiceDep,
) -> CommentCreateResponse:
    """Append a comment to a post."""
    comment = content.add_comment(post_id, claims.user_id, payload.content)
    return CommentCreateResponse(
        message="Comment added successfully",
        comment=CommentResponse.model_validate(comment.model_dump()),
    )


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(
    post_id: str,
    claims: CurrentClaimsDep,
    content: ContentServiceDep,
) -> list[CommentResponse]:
    """Return the comments of a post, oldest first."""
    return [
        CommentResponse.model_validate(comment.model_dump())
        for comment in content.list_comments(post_id)
    ]
