"""
Notification read-side service functions.

Notifications are only ever created by the NotificationEmitter. The API can
list them and mark them read, nothing else.
"""

from sqlalchemy.orm import Session

from skillshare.exceptions import NotFoundError
from skillshare.logging import get_logger
from skillshare.models import Notification
from skillshare.repositories import NotificationRepository
from skillshare.security import ensure_owner

logger = get_logger("backend.notifications")


def list_notifications(db: Session, user_id: str, unread_only: bool = False) -> list[Notification]:
    return NotificationRepository(db).list_for_user(user_id, unread_only=unread_only)


def unread_count(db: Session, user_id: str) -> int:
    return NotificationRepository(db).count_unread(user_id)


def mark_read(db: Session, notification_id: str, subject_id: str) -> Notification:
    """Mark one notification read. Only its recipient may do this."""
    notifications = NotificationRepository(db)
    notification = notifications.get_by_id(notification_id)
    if notification is None:
        raise NotFoundError("Notification", notification_id)
    ensure_owner(subject_id, notification.user_id, "notification")
    return notifications.mark_read(notification)


def mark_all_read(db: Session, user_id: str) -> int:
    updated = NotificationRepository(db).mark_all_read(user_id)
    logger.info("notifications_marked_read", user_id=user_id, updated=updated)
    return updated
