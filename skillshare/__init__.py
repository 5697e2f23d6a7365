"""
SkillShare Core Library.

This package provides the identity and social-graph core of the SkillShare
backend: configuration, database management, models, repositories, security
(tokens, passwords, authorization gate) and services.

Usage:
    # Database
    from skillshare.db import db, get_db
    from skillshare.models import User, Post, Notification
    from skillshare.repositories import UserRepository

    # Config
    from skillshare.config import get_settings, Settings

    # Logging
    from skillshare.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from skillshare.db import db
#   from skillshare.config import get_settings
#   from skillshare.logging import get_logger
