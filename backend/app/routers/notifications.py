"""
Notification endpoints for the authenticated user.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from skillshare.db import get_db
from skillshare.logging import get_logger

from ..auth.dependencies import get_current_subject
from ..schemas import MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from ..services import notification_service

logger = get_logger("notifications")

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False),
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> list[NotificationResponse]:
    """Newest first."""
    notifications = notification_service.list_notifications(db, subject_id, unread_only)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=notification_service.unread_count(db, subject_id))


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=notification_service.mark_all_read(db, subject_id))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> NotificationResponse:
    notification = notification_service.mark_read(db, notification_id, subject_id)
    return NotificationResponse.model_validate(notification)
