"""Follow relationships between users."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from ayoma.core.errors import NotFoundError, SelfReferenceError
from ayoma.db.session import USERS
from ayoma.db.store import RecordStore
from ayoma.models import User
from ayoma.repositories import UserRepository

__all__ = ["FollowResult", "SocialGraphService"]

logger = logging.getLogger(__name__)

FollowAction = Literal["followed", "unfollowed"]


@dataclass(frozen=True)
class FollowResult:
    """Outcome of a follow toggle."""

    action: FollowAction
    actor: User
    target: User

    @property
    def target_follower_count(self) -> int:
        return len(self.target.followers)


class SocialGraphService:
    """Keeps ``following`` and ``followers`` symmetric across user records."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def follow(self, actor_id: str, target_id: str) -> FollowResult:
        """Follow ``target_id``, or unfollow it if already followed.

        Both user records change in one transaction and one persist.

        Raises:
            SelfReferenceError: If the actor targets itself.
            NotFoundError: If either user does not exist.
        """
        if actor_id == target_id:
            raise SelfReferenceError("You cannot follow yourself")

        with self.store.transaction(USERS) as collections:
            users = UserRepository(collections[USERS])
            actor = users.get_by_id(actor_id)
            target = users.get_by_id(target_id)
            if actor is None or target is None:
                raise NotFoundError("One of the users could not be found")

            action: FollowAction
            if actor.is_following(target_id):
                actor.following = [uid for uid in actor.following if uid != target_id]
                target.followers = [uid for uid in target.followers if uid != actor_id]
                action = "unfollowed"
            else:
                actor.following = [*actor.following, target_id]
                if actor_id not in target.followers:
                    target.followers = [*target.followers, actor_id]
                action = "followed"

            users.save(actor)
            users.save(target)

        logger.info("%s %s %s", actor.username, action, target.username)
        return FollowResult(action=action, actor=actor, target=target)
