"""
User profile and follow service functions.
"""

from sqlalchemy.orm import Session

from skillshare.exceptions import NotFoundError
from skillshare.logging import get_logger
from skillshare.models import User
from skillshare.repositories import UserRepository
from skillshare.security import ensure_owner
from skillshare.services import (
    EmitOutcome,
    FollowCounts,
    NotificationEmitter,
    SocialGraphMutator,
    WriteResult,
)

from ..schemas import ProfileUpdateRequest

logger = get_logger("backend.users")


def get_user(db: Session, user_id: str) -> User:
    """Fetch a user or raise NotFoundError."""
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def list_users(db: Session, limit: int = 100, offset: int = 0) -> list[User]:
    return UserRepository(db).get_all(limit=limit, offset=offset)


def update_profile(
    db: Session,
    user_id: str,
    subject_id: str,
    payload: ProfileUpdateRequest,
) -> User:
    """Apply the fields present in the payload to the caller's own profile."""
    user = get_user(db, user_id)
    ensure_owner(subject_id, user.id, "profile")

    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(user, key, value)
    UserRepository(db).save(user)

    logger.info("profile_updated", user_id=user.id, fields=sorted(changes))
    return user


def delete_account(db: Session, user_id: str, subject_id: str) -> None:
    """
    Delete the caller's own account.

    References held elsewhere (follower lists, posts, comments) are left in
    place. Readers skip ids that no longer resolve.
    """
    user = get_user(db, user_id)
    ensure_owner(subject_id, user.id, "account")
    UserRepository(db).delete(user.id)
    logger.info("account_deleted", user_id=user_id)


def follow_user(
    graph: SocialGraphMutator,
    emitter: NotificationEmitter,
    follower_id: str,
    target_id: str,
) -> WriteResult[FollowCounts]:
    """
    Follow target_id and notify them.

    Repeating a follow changes nothing and sends nothing.
    """
    result = graph.follow(follower_id, target_id)
    outcome = EmitOutcome.SKIPPED
    if result.changed:
        outcome = emitter.on_follow(follower_id, target_id)
    return WriteResult(value=result.counts, side_effect=outcome)


def unfollow_user(graph: SocialGraphMutator, follower_id: str, target_id: str) -> FollowCounts:
    return graph.unfollow(follower_id, target_id).counts


def list_followers(db: Session, user_id: str) -> list[User]:
    """Followers of a user. Ids of deleted accounts are skipped."""
    users = UserRepository(db)
    user = get_user(db, user_id)
    return users.get_many(list(user.followers))


def list_following(db: Session, user_id: str) -> list[User]:
    """Users followed by a user. Ids of deleted accounts are skipped."""
    users = UserRepository(db)
    user = get_user(db, user_id)
    return users.get_many(list(user.following))
