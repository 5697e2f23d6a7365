"""
Authentication dependencies for FastAPI routes.

The authorization middleware has already validated the bearer token (if any)
by the time a route runs. These dependencies only read its verdict from
request.state, so the token is verified exactly once per request.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from skillshare.config import Settings, get_settings
from skillshare.db import get_db
from skillshare.exceptions import UnauthorizedError
from skillshare.repositories import NotificationRepository, PostRepository, UserRepository
from skillshare.security import TokenService
from skillshare.services import AuthenticationService, NotificationEmitter, SocialGraphMutator


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_optional_subject(request: Request) -> str | None:
    """Authenticated user id, or None for an anonymous request."""
    return getattr(request.state, "subject_id", None)


def get_current_subject(subject_id: str | None = Depends(get_optional_subject)) -> str:
    """
    Authenticated user id.

    Raises:
        UnauthorizedError: If the request carries no valid token.
    """
    if subject_id is None:
        raise UnauthorizedError()
    return subject_id


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticationService:
    return AuthenticationService(UserRepository(db), tokens)


def get_social_graph(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SocialGraphMutator:
    return SocialGraphMutator(UserRepository(db), max_attempts=settings.follow_max_attempts)


def get_notification_emitter(db: Session = Depends(get_db)) -> NotificationEmitter:
    return NotificationEmitter(NotificationRepository(db), PostRepository(db))
