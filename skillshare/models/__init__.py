"""
Unified SQLAlchemy models for SkillShare.

Single source of truth for all database models.

Usage:
    from skillshare.models import User, Post, LearningPlan, Notification
"""

from .base import Base
from .learning_plan import LearningPlan
from .notification import (
    NOTIFICATION_TYPE_COMMENT,
    NOTIFICATION_TYPE_FOLLOW,
    NOTIFICATION_TYPE_LIKE,
    Notification,
)
from .post import Comment, Like, Post
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Content
    "Post",
    "Comment",
    "Like",
    "LearningPlan",
    # Notification
    "Notification",
    "NOTIFICATION_TYPE_COMMENT",
    "NOTIFICATION_TYPE_LIKE",
    "NOTIFICATION_TYPE_FOLLOW",
]
