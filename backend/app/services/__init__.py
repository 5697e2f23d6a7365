"""
Backend services for SkillShare.
"""

from . import learning_plan_service, notification_service, post_service, user_service

__all__ = [
    "learning_plan_service",
    "notification_service",
    "post_service",
    "user_service",
]
