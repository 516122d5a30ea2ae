# tests/services/test_content.py
"""Tests for posts, likes and comments."""

from __future__ import annotations

from datetime import timedelta

import pytest

from ayoma.core.errors import NotFoundError, ValidationError
from ayoma.db.store import MemoryRecordStore
from ayoma.db.time import utcnow
from ayoma.models import Comment, Post
from ayoma.services.content import ContentService


def _post_record(post_id: str, author_id: str, minutes_ago: int, **extra) -> dict:
    return Post(
        id=post_id,
        author_id=author_id,
        author_name=author_id,
        author_profile_pic="/img/profile.jpg",
        content=f"post {post_id}",
        timestamp=_BASE - timedelta(minutes=minutes_ago),
        **extra,
    ).to_record()


_BASE = utcnow()


class TestCreatePost:
    def test_requires_content_or_media(self, content: ContentService, store, alice) -> None:
        for text, media in [(None, None), ("", None), (None, ""), ("", "")]:
            with pytest.raises(ValidationError):
                content.create_post(alice.id, content=text, media_url=media)

        assert store.load("posts") == []
        assert store.load("users")[0]["postsCount"] == 0

    @pytest.mark.parametrize(
        ("text", "media"),
        [("hi", None), (None, "/uploads/1-cat.png"), ("hi", "/uploads/1-cat.png")],
    )
    def test_either_content_or_media_is_enough(self, content: ContentService, alice, text, media) -> None:
        post = content.create_post(alice.id, content=text, media_url=media)

        assert post.content == text
        assert post.media_url == media

    def test_unknown_author(self, content: ContentService, store) -> None:
        with pytest.raises(NotFoundError):
            content.create_post("user-missing", content="hi")

        assert store.load("posts") == []

    def test_snapshots_author_and_counts_posts(self, content: ContentService, accounts, alice) -> None:
        post = content.create_post(alice.id, content="hi")

        assert post.id.startswith("post-")
        assert post.author_id == alice.id
        assert post.author_name == "alice"
        assert post.author_profile_pic == alice.user.profile_pic
        assert post.likes == []
        assert post.comments == []
        assert post.comments_count == 0
        assert accounts.get_user(alice.id).posts_count == 1

    def test_posts_count_matches_authored_posts(self, content: ContentService, accounts, alice, bob) -> None:
        for text in ("one", "two", "three"):
            content.create_post(alice.id, content=text)
        content.create_post(bob.id, content="four")

        for user in (alice, bob):
            stored = accounts.get_user(user.id)
            assert stored.posts_count == len(content.list_by_author(user.id))

    def test_new_posts_are_prepended(self, content: ContentService, store, alice) -> None:
        first = content.create_post(alice.id, content="first")
        second = content.create_post(alice.id, content="second")

        assert [record["id"] for record in store.load("posts")] == [second.id, first.id]

    def test_author_snapshot_is_not_refreshed(self, content: ContentService, accounts, alice) -> None:
        post = content.create_post(alice.id, content="hi")
        accounts.update_profile(alice.id, profile_pic="/uploads/new.png")

        assert content.get_post(post.id).author_profile_pic == alice.user.profile_pic


class TestListing:
    def test_feed_is_newest_first_whatever_the_storage_order(self) -> None:
        store = MemoryRecordStore(
            {
                "posts": [
                    _post_record("p-mid", "u1", minutes_ago=10),
                    _post_record("p-old", "u2", minutes_ago=30),
                    _post_record("p-new", "u1", minutes_ago=1),
                ]
            }
        )

        feed = ContentService(store).list_feed()

        assert [post.id for post in feed] == ["p-new", "p-mid", "p-old"]
        assert all(a.timestamp >= b.timestamp for a, b in zip(feed, feed[1:]))

    def test_equal_timestamps_keep_storage_order(self) -> None:
        store = MemoryRecordStore(
            {
                "posts": [
                    _post_record("p-b", "u1", minutes_ago=5),
                    _post_record("p-a", "u1", minutes_ago=5),
                    _post_record("p-old", "u1", minutes_ago=9),
                ]
            }
        )

        assert [post.id for post in ContentService(store).list_feed()] == ["p-b", "p-a", "p-old"]

    def test_list_by_author_filters_and_orders(self) -> None:
        store = MemoryRecordStore(
            {
                "posts": [
                    _post_record("p1", "u1", minutes_ago=20),
                    _post_record("p2", "u2", minutes_ago=10),
                    _post_record("p3", "u1", minutes_ago=5),
                ]
            }
        )
        service = ContentService(store)

        assert [post.id for post in service.list_by_author("u1")] == ["p3", "p1"]
        assert service.list_by_author("u-none") == []

    def test_empty_feed(self, content: ContentService) -> None:
        assert content.list_feed() == []


class TestLikes:
    def test_like_then_unlike_restores_state(self, content: ContentService, alice, bob) -> None:
        post = content.create_post(alice.id, content="hi")

        liked = content.toggle_like(post.id, bob.id)
        assert (liked.liked, liked.likes_count) == (True, 1)
        assert content.get_post(post.id).likes == [bob.id]

        unliked = content.toggle_like(post.id, bob.id)
        assert (unliked.liked, unliked.likes_count) == (False, 0)
        assert content.get_post(post.id).likes == []

    def test_likes_from_several_users(self, content: ContentService, alice, bob, carol) -> None:
        post = content.create_post(alice.id, content="hi")
        content.toggle_like(post.id, bob.id)

        result = content.toggle_like(post.id, carol.id)

        assert result.likes_count == 2
        assert content.toggle_like(post.id, bob.id).likes_count == 1
        assert content.get_post(post.id).likes == [carol.id]

    def test_unknown_post(self, content: ContentService, alice) -> None:
        with pytest.raises(NotFoundError):
            content.toggle_like("post-missing", alice.id)


class TestComments:
    def test_add_comment_snapshots_author_and_counts(self, content: ContentService, alice, bob) -> None:
        post = content.create_post(alice.id, content="hi")

        comment = content.add_comment(post.id, bob.id, "nice")

        assert comment.id.startswith("comment-")
        assert comment.user_id == bob.id
        assert comment.username == "bob"
        assert comment.content == "nice"
        stored = content.get_post(post.id)
        assert stored.comments == [comment]
        assert stored.comments_count == 1

    def test_comments_count_tracks_appends(self, content: ContentService, alice, bob) -> None:
        post = content.create_post(alice.id, content="hi")
        for text in ("one", "two", "three"):
            content.add_comment(post.id, bob.id, text)

        stored = content.get_post(post.id)
        assert stored.comments_count == len(stored.comments) == 3
        assert [c.content for c in content.list_comments(post.id)] == ["one", "two", "three"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_comment_is_rejected(self, content: ContentService, alice, text: str) -> None:
        post = content.create_post(alice.id, content="hi")

        with pytest.raises(ValidationError):
            content.add_comment(post.id, alice.id, text)

        assert content.get_post(post.id).comments_count == 0

    def test_unknown_post(self, content: ContentService, alice) -> None:
        with pytest.raises(NotFoundError):
            content.add_comment("post-missing", alice.id, "hi")
        with pytest.raises(NotFoundError):
            content.list_comments("post-missing")

    def test_unknown_author(self, content: ContentService, alice) -> None:
        post = content.create_post(alice.id, content="hi")

        with pytest.raises(NotFoundError):
            content.add_comment(post.id, "user-missing", "hi")

    def test_comments_are_listed_oldest_first(self) -> None:
        comments = [
            Comment(id=f"c{age}", user_id="u2", username="bob", content=str(age),
                    timestamp=_BASE - timedelta(minutes=age))
            for age in (1, 10, 5)
        ]
        store = MemoryRecordStore(
            {"posts": [_post_record("p1", "u1", minutes_ago=30, comments=comments, comments_count=3)]}
        )

        listed = ContentService(store).list_comments("p1")

        assert [c.id for c in listed] == ["c10", "c5", "c1"]
        assert all(a.timestamp <= b.timestamp for a, b in zip(listed, listed[1:]))
