"""Notification repository."""

from skillshare.models import Notification

from .base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification operations."""

    model = Notification

    def list_for_user(self, user_id: str, unread_only: bool = False) -> list[Notification]:
        """Newest first."""
        query = self.session.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        return query.order_by(Notification.created_at.desc()).all()

    def count_unread(self, user_id: str) -> int:
        return self.count(user_id=user_id, read=False)

    def mark_read(self, notification: Notification) -> Notification:
        notification.read = True
        self.session.flush()
        return notification

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read. Returns rows updated."""
        result = (
            self.session.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True})
        )
        self.session.flush()
        return result
