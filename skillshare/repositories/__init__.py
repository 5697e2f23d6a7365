"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.

Usage:
    from skillshare.repositories import UserRepository
    from skillshare.db import db

    with db.session() as session:
        repo = UserRepository(session)
        user = repo.get_by_email("alice@example.com")
"""

from .base import BaseRepository
from .learning_plan_repository import LearningPlanRepository
from .notification_repository import NotificationRepository
from .post_repository import CommentRepository, LikeRepository, PostRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "LikeRepository",
    "LearningPlanRepository",
    "NotificationRepository",
]
