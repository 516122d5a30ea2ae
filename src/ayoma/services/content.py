"""Posts, likes and comments.

The feed and per-author listings are newest first, comment listings are
oldest first. Both orderings rely on Python's stable sort so records sharing
a timestamp keep their storage order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ayoma.core.errors import NotFoundError, ValidationError
from ayoma.db.session import POSTS, USERS
from ayoma.db.store import RecordStore
from ayoma.db.time import utcnow
from ayoma.models import Comment, Post, new_id
from ayoma.repositories import PostRepository, UserRepository

__all__ = ["ContentService", "LikeResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeResult:
    """Outcome of a like toggle."""

    liked: bool
    likes_count: int


def _newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda post: post.timestamp, reverse=True)


class ContentService:
    """Creates posts and records likes and comments on them."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def create_post(
        self,
        author_id: str,
        content: str | None = None,
        media_url: str | None = None,
    ) -> Post:
        """Publish a post and bump the author's ``posts_count``.

        Empty content counts as absent.

        Raises:
            ValidationError: If neither content nor media is given.
            NotFoundError: If the author does not exist.
        """
        content = content or None
        if content is None and not media_url:
            raise ValidationError("Post content or media is required")

        with self.store.transaction(POSTS, USERS) as collections:
            users = UserRepository(collections[USERS])
            posts = PostRepository(collections[POSTS])
            author = users.get_by_id(author_id)
            if author is None:
                raise NotFoundError("Post author not found")

            post = posts.prepend(
                Post(
                    id=new_id("post"),
                    author_id=author.id,
                    author_name=author.username,
                    author_profile_pic=author.profile_pic,
                    content=content,
                    media_url=media_url or None,
                    timestamp=utcnow(),
                )
            )
            author.posts_count += 1
            users.save(author)

        logger.info("New post %s by %s", post.id, author.username)
        return post

    def get_post(self, post_id: str) -> Post:
        """Return a post by id.

        Raises:
            NotFoundError: If the post does not exist.
        """
        post = PostRepository(self.store.read(POSTS)).get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def list_feed(self) -> list[Post]:
        """Return every post, newest first."""
        return _newest_first(PostRepository(self.store.read(POSTS)).all())

    def list_by_author(self, author_id: str) -> list[Post]:
        """Return the posts of one author, newest first."""
        posts = PostRepository(self.store.read(POSTS)).all()
        return _newest_first([post for post in posts if post.author_id == author_id])

    def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        """Like the post, or remove the like if ``user_id`` already liked it.

        Raises:
            NotFoundError: If the post does not exist.
        """
        with self.store.transaction(POSTS) as collections:
            posts = PostRepository(collections[POSTS])
            post = posts.get_by_id(post_id)
            if post is None:
                raise NotFoundError("Post not found")

            liked = user_id not in post.likes
            if liked:
                post.likes = [*post.likes, user_id]
            else:
                post.likes = [uid for uid in post.likes if uid != user_id]
            posts.save(post)

        logger.info(
            "Post %s %s by %s, now %d likes",
            post_id,
            "liked" if liked else "unliked",
            user_id,
            post.likes_count,
        )
        return LikeResult(liked=liked, likes_count=post.likes_count)

    def add_comment(self, post_id: str, author_id: str, content: str) -> Comment:
        """Append a comment and refresh ``comments_count``.

        Raises:
            ValidationError: If the content is empty or only whitespace.
            NotFoundError: If the post or the author does not exist.
        """
        if not content or not content.strip():
            raise ValidationError("Comment content cannot be empty")

        with self.store.transaction(POSTS, reads=(USERS,)) as collections:
            posts = PostRepository(collections[POSTS])
            post = posts.get_by_id(post_id)
            if post is None:
                raise NotFoundError("Post not found")
            author = UserRepository(collections[USERS]).get_by_id(author_id)
            if author is None:
                raise NotFoundError("Comment author not found")

            comment = Comment(
                id=new_id("comment"),
                user_id=author.id,
                username=author.username,
                content=content,
                timestamp=utcnow(),
            )
            post.comments = [*post.comments, comment]
            post.comments_count = len(post.comments)
            posts.save(post)

        logger.info("New comment on post %s by %s: %.20r", post_id, author.username, content)
        return comment

    def list_comments(self, post_id: str) -> list[Comment]:
        """Return the comments of a post, oldest first.

        Raises:
            NotFoundError: If the post does not exist.
        """
        post = self.get_post(post_id)
        return sorted(post.comments, key=lambda comment: comment.timestamp)
