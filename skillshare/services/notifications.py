"""
Notification Side-Effect Emitter.

Called synchronously right after a primary write (comment, like, follow) has
succeeded. It resolves who should be told, builds the notification and stores
it. Whatever goes wrong in here is logged and reported as EmitOutcome.FAILED,
never raised: the primary write has already happened and its result goes back
to the caller regardless. A failed notification is simply lost. There is no
retry and no queue.

The insert runs inside its own savepoint so a failed write cannot poison the
transaction that carries the primary write.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from skillshare.exceptions import NotFoundError
from skillshare.logging import get_logger
from skillshare.models import (
    NOTIFICATION_TYPE_COMMENT,
    NOTIFICATION_TYPE_FOLLOW,
    NOTIFICATION_TYPE_LIKE,
    Comment,
    Like,
    Notification,
)
from skillshare.repositories import NotificationRepository, PostRepository

logger = get_logger("notifications")

T = TypeVar("T")


class EmitOutcome(str, Enum):
    CREATED = "created"
    # Nothing to send, e.g. a user acting on their own post
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteResult(Generic[T]):
    """
    Outcome of a write that may trigger a notification.

    Only `value` is returned to API callers. `side_effect` is for logging and
    tests and must never change control flow.
    """

    value: T
    side_effect: EmitOutcome = EmitOutcome.SKIPPED


class NotificationEmitter:
    """
    Best-effort notification creation.

    Usage:
        emitter = NotificationEmitter(NotificationRepository(session), PostRepository(session))
        outcome = emitter.on_comment(comment)
    """

    COMMENT_MESSAGE = "New comment on your post"
    LIKE_MESSAGE = "New like on your post"
    FOLLOW_MESSAGE = "You have a new follower"

    def __init__(self, notifications: NotificationRepository, posts: PostRepository):
        self.notifications = notifications
        self.posts = posts

    def on_comment(self, comment: Comment) -> EmitOutcome:
        def build() -> Notification | None:
            return self._for_post_owner(
                post_id=comment.post_id,
                actor_id=comment.user_id,
                kind=NOTIFICATION_TYPE_COMMENT,
                message=self.COMMENT_MESSAGE,
                comment_id=comment.id,
            )

        return self._emit(NOTIFICATION_TYPE_COMMENT, build)

    def on_like(self, like: Like) -> EmitOutcome:
        def build() -> Notification | None:
            return self._for_post_owner(
                post_id=like.post_id,
                actor_id=like.user_id,
                kind=NOTIFICATION_TYPE_LIKE,
                message=self.LIKE_MESSAGE,
            )

        return self._emit(NOTIFICATION_TYPE_LIKE, build)

    def on_follow(self, follower_id: str, target_id: str) -> EmitOutcome:
        def build() -> Notification | None:
            if follower_id == target_id:
                return None
            return Notification(
                user_id=target_id,
                action_user_id=follower_id,
                type=NOTIFICATION_TYPE_FOLLOW,
                message=self.FOLLOW_MESSAGE,
                read=False,
            )

        return self._emit(NOTIFICATION_TYPE_FOLLOW, build)

    def _for_post_owner(
        self,
        post_id: str,
        actor_id: str,
        kind: str,
        message: str,
        comment_id: str | None = None,
    ) -> Notification | None:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        if post.user_id == actor_id:
            return None
        return Notification(
            user_id=post.user_id,
            action_user_id=actor_id,
            type=kind,
            message=message,
            post_id=post_id,
            comment_id=comment_id,
            read=False,
        )

    def _emit(self, trigger: str, build: Callable[[], Notification | None]) -> EmitOutcome:
        session = self.notifications.session
        try:
            with session.begin_nested():
                notification = build()
                if notification is not None:
                    self.notifications.save(notification)
        except Exception as e:
            logger.error(
                "notification_failed",
                trigger=trigger,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return EmitOutcome.FAILED

        if notification is None:
            logger.debug("notification_skipped", trigger=trigger)
            return EmitOutcome.SKIPPED

        logger.info(
            "notification_created",
            trigger=trigger,
            notification_id=notification.id,
            recipient_id=notification.user_id,
        )
        return EmitOutcome.CREATED


__all__ = ["EmitOutcome", "NotificationEmitter", "WriteResult"]
