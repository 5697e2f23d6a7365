"""
Notification model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utcnow

NOTIFICATION_TYPE_COMMENT = "COMMENT"
NOTIFICATION_TYPE_LIKE = "LIKE"
NOTIFICATION_TYPE_FOLLOW = "FOLLOW"


class Notification(Base):
    """
    Notification for a user, created only by the notification emitter.

    The only mutation after creation is flipping `read`.

    Attributes:
        user_id: Recipient
        action_user_id: User whose action triggered the notification
        post_id/comment_id: Optional references to the originating content
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    type: Mapped[str] = mapped_column(String(32))
    message: Mapped[str] = mapped_column(Text)
    action_user_id: Mapped[str] = mapped_column(String(36))
    post_id: Mapped[Optional[str]] = mapped_column(String(36))
    comment_id: Mapped[Optional[str]] = mapped_column(String(36))
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
