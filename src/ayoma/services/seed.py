"""Demo content for a fresh installation."""
from __future__ import annotations

import logging
from datetime import timedelta

from ayoma.core import security
from ayoma.db.session import POSTS, USERS
from ayoma.db.store import RecordStore
from ayoma.db.time import utcnow
from ayoma.models import Comment, Post, User, new_id
from ayoma.repositories import PostRepository, UserRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


def seed_demo_data(store: RecordStore) -> bool:
    """Create two mutually following users and a few posts.

    Nothing happens when any user already exists.

    Returns:
        True if demo data was written.
    """
    if store.read(USERS):
        return False

    password_hash = security.hash_password(DEMO_PASSWORD)
    now = utcnow()

    with store.transaction(POSTS, USERS) as collections:
        users = UserRepository(collections[USERS])
        posts = PostRepository(collections[POSTS])
        if users.records:
            return False

        ayoma = User(
            id=new_id("user"),
            username="ayomauser",
            email="ayoma@example.com",
            password_hash=password_hash,
            profile_pic="/img/profile.jpg",
            bio="I am Ayoma, a test user.",
        )
        tester = User(
            id=new_id("user"),
            username="testuser",
            email="test@example.com",
            password_hash=password_hash,
            profile_pic="https://via.placeholder.com/150/007bff/FFFFFF?text=Test",
            bio="Hello! Have a look at my profile.",
        )
        ayoma.following = [tester.id]
        ayoma.followers = [tester.id]
        tester.following = [ayoma.id]
        tester.followers = [ayoma.id]

        demo_posts = [
            Post(
                id=new_id("post"),
                author_id=ayoma.id,
                author_name=ayoma.username,
                author_profile_pic=ayoma.profile_pic,
                content="Hello Ayoma community! This is my first post here.",
                timestamp=now - timedelta(hours=1),
                likes=[tester.id],
                comments=[
                    Comment(
                        id=new_id("comment"),
                        user_id=tester.id,
                        username=tester.username,
                        content="Great to see you here, Ayoma!",
                        timestamp=now - timedelta(minutes=55),
                    )
                ],
                comments_count=1,
            ),
            Post(
                id=new_id("post"),
                author_id=tester.id,
                author_name=tester.username,
                author_profile_pic=tester.profile_pic,
                content="I love this platform! Sharing thoughts is so easy. #Ayoma",
                media_url="https://via.placeholder.com/400x200/007bff/FFFFFF?text=Image+Cool",
                timestamp=now - timedelta(minutes=30),
                likes=[ayoma.id],
            ),
            Post(
                id=new_id("post"),
                author_id=ayoma.id,
                author_name=ayoma.username,
                author_profile_pic=ayoma.profile_pic,
                content="New day, new opportunities!",
                timestamp=now,
            ),
        ]
        for post in demo_posts:
            posts.prepend(post)

        ayoma.posts_count = posts.count_by_author(ayoma.id)
        tester.posts_count = posts.count_by_author(tester.id)
        users.add(ayoma)
        users.add(tester)

    logger.info("Seeded demo users and %d posts", len(demo_posts))
    return True
