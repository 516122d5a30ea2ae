"""Data access helpers for working with posts."""
from __future__ import annotations

from ayoma.db.store import Record
from ayoma.models.post import Post

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around the mutable post records of a transaction.

    Records are kept most-recent-first: new posts are prepended.
    """

    def __init__(self, records: list[Record]) -> None:
        """Initialize the repository with a collection loaded by the store."""
        self.records = records

    def all(self) -> list[Post]:
        """Return posts in storage order."""
        return [Post.model_validate(record) for record in self.records]

    def _index_of(self, post_id: str) -> int | None:
        for index, record in enumerate(self.records):
            if record.get("id") == post_id:
                return index
        return None

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        index = self._index_of(post_id)
        if index is None:
            return None
        return Post.model_validate(self.records[index])

    def count_by_author(self, author_id: str) -> int:
        return sum(1 for record in self.records if record.get("authorId") == author_id)

    def prepend(self, post: Post) -> Post:
        """Insert a new post at the head of the collection."""
        self.records.insert(0, post.to_record())
        return post

    def save(self, post: Post) -> Post:
        """Replace the stored record of an existing post.

        Raises:
            KeyError: If the post is not part of the collection.
        """
        index = self._index_of(post.id)
        if index is None:
            raise KeyError(post.id)
        self.records[index] = post.to_record()
        return post
