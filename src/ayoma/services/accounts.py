"""Account registration, authentication and profile updates.

Password hashes never leave this module: callers receive ``User`` records and
the API layer turns them into ``UserPublic`` before answering.
"""
from __future__ import annotations

import logging

from ayoma.core import security
from ayoma.core.errors import DuplicateError, InvalidCredentialsError, NotFoundError
from ayoma.core.settings import settings
from ayoma.db.session import USERS
from ayoma.db.store import RecordStore
from ayoma.models import User, new_id
from ayoma.repositories import UserRepository
from ayoma.services.tokens import TokenService

__all__ = ["AccountService"]

logger = logging.getLogger(__name__)


class AccountService:
    """Identity and credential management over the user collection."""

    def __init__(self, store: RecordStore, tokens: TokenService) -> None:
        self.store = store
        self.tokens = tokens

    def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and sign it in.

        Username and email must not match any existing user exactly
        (case-sensitive).

        Returns:
            The created user and a fresh bearer token.

        Raises:
            DuplicateError: If the username or email is already registered.
        """
        # Hash before taking the lock, the cost factor makes this slow
        password_hash = security.hash_password(password)

        with self.store.transaction(USERS) as collections:
            users = UserRepository(collections[USERS])
            if users.field_taken("username", username):
                raise DuplicateError("username", "This username is already taken")
            if users.field_taken("email", email):
                raise DuplicateError("email", "This email is already registered")

            user = users.add(
                User(
                    id=new_id("user"),
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    profile_pic=settings.default_profile_pic,
                    bio=settings.default_bio,
                )
            )

        logger.info("Registered new user %s", user.username)
        return user, self.tokens.issue(user.id, user.username)

    def authenticate(self, identifier: str, password: str) -> tuple[User, str]:
        """Sign in by username or email.

        Raises:
            NotFoundError: If no user has that username or email.
            InvalidCredentialsError: If the password does not match.
        """
        users = UserRepository(self.store.read(USERS))
        user = users.find_by_identifier(identifier)
        if user is None:
            logger.info("Login failed: unknown identifier")
            raise NotFoundError("User not found")

        if not security.verify_password(password, user.password_hash):
            logger.info("Login failed for %s: incorrect password", user.username)
            raise InvalidCredentialsError("Incorrect password")

        logger.info("User %s logged in", user.username)
        return user, self.tokens.issue(user.id, user.username)

    def get_user(self, user_id: str) -> User:
        """Return a user by id.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = UserRepository(self.store.read(USERS)).get_by_id(user_id)
        if user is None:
            raise NotFoundError("User profile not found")
        return user

    def list_users(self) -> list[User]:
        """Return every user in registration order."""
        return UserRepository(self.store.read(USERS)).all()

    def update_profile(
        self,
        user_id: str,
        *,
        bio: str | None = None,
        profile_pic: str | None = None,
    ) -> User:
        """Change only the supplied profile fields.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self.store.transaction(USERS) as collections:
            users = UserRepository(collections[USERS])
            user = users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User profile not found")

            if bio is not None:
                user.bio = bio
            if profile_pic is not None:
                user.profile_pic = profile_pic
            users.save(user)

        logger.info("Updated profile of %s", user.username)
        return user
