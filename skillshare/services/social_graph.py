"""
Social Graph Mutator.

Keeps the two halves of a follow relationship in step:

    B.id in A.following  <=>  A.id in B.followers

The halves live in two separate user documents. Each document write is
guarded by the row's version counter: if either document changed since it was
read, the attempt is rolled back to its savepoint, both documents are re-read
and the mutation is re-applied. After `max_attempts` conflicts the call fails
with ConflictError. The follower document is always written before the target.

follow and unfollow are idempotent. Each call also repairs a half-written
relationship left behind by an earlier failure, because both halves are
checked independently.
"""

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm.exc import StaleDataError

from skillshare.exceptions import ConflictError, NotFoundError, SelfFollowError
from skillshare.logging import LogContext, get_logger
from skillshare.models import User
from skillshare.repositories import UserRepository

logger = get_logger("social_graph")


@dataclass(frozen=True)
class FollowCounts:
    """Follower/following totals of the target user."""

    followers_count: int
    following_count: int

    @classmethod
    def of(cls, user: User) -> "FollowCounts":
        return cls(
            followers_count=user.followers_count,
            following_count=user.following_count,
        )


@dataclass(frozen=True)
class FollowResult:
    counts: FollowCounts
    # True when the follower's side of the edge was actually added or removed
    changed: bool


class SocialGraphMutator:
    """
    Symmetric follow/unfollow across two user documents.

    Usage:
        graph = SocialGraphMutator(UserRepository(session))
        result = graph.follow(alice.id, bob.id)
        result.counts.followers_count
    """

    def __init__(self, users: UserRepository, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.users = users
        self.max_attempts = max_attempts

    def follow(self, follower_id: str, target_id: str) -> FollowResult:
        """
        Make follower_id follow target_id.

        Raises:
            SelfFollowError: follower_id == target_id (nothing is read or written).
            NotFoundError: Either user does not exist.
            ConflictError: Concurrent modifications exhausted all attempts.
        """
        if follower_id == target_id:
            raise SelfFollowError()

        def link(follower: User, target: User) -> bool:
            added = target.id not in follower.following
            if added:
                follower.following = [*follower.following, target.id]
                self.users.save(follower)
            if follower.id not in target.followers:
                target.followers = [*target.followers, follower.id]
                self.users.save(target)
            return added

        with LogContext(follower_id=follower_id, target_id=target_id):
            result = self._mutate("follow", follower_id, target_id, link)
            logger.info("follow_applied", changed=result.changed)
            return result

    def unfollow(self, follower_id: str, target_id: str) -> FollowResult:
        """
        Remove the follow edge from follower_id to target_id, if any.

        Raises:
            NotFoundError: Either user does not exist.
            ConflictError: Concurrent modifications exhausted all attempts.
        """

        def unlink(follower: User, target: User) -> bool:
            removed = target.id in follower.following
            if removed:
                follower.following = [i for i in follower.following if i != target.id]
                self.users.save(follower)
            if follower.id in target.followers:
                target.followers = [i for i in target.followers if i != follower.id]
                self.users.save(target)
            return removed

        with LogContext(follower_id=follower_id, target_id=target_id):
            result = self._mutate("unfollow", follower_id, target_id, unlink)
            logger.info("unfollow_applied", changed=result.changed)
            return result

    def _load(self, user_id: str) -> User:
        user = self.users.get_current(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _mutate(
        self,
        operation: str,
        follower_id: str,
        target_id: str,
        apply: Callable[[User, User], bool],
    ) -> FollowResult:
        session = self.users.session
        for attempt in range(1, self.max_attempts + 1):
            try:
                with session.begin_nested():
                    follower = self._load(follower_id)
                    target = follower if follower_id == target_id else self._load(target_id)
                    changed = apply(follower, target)
                    counts = FollowCounts.of(target)
                return FollowResult(counts=counts, changed=changed)
            except StaleDataError:
                logger.warning("graph_write_conflict", operation=operation, attempt=attempt)

        logger.error("graph_write_conflict_exhausted", operation=operation, attempts=self.max_attempts)
        raise ConflictError()


__all__ = ["FollowCounts", "FollowResult", "SocialGraphMutator"]
