"""
Post, comment and like endpoints.

Reads are public. Writes need a token, and edits or deletes are limited to the
author of the post or comment.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from skillshare.db import get_db
from skillshare.logging import get_logger
from skillshare.services import NotificationEmitter

from ..auth.dependencies import get_current_subject, get_notification_emitter
from ..schemas import (
    CommentRequest,
    CommentResponse,
    LikeResponse,
    PostCreateRequest,
    PostResponse,
    PostUpdateRequest,
)
from ..services import post_service

logger = get_logger("posts")

router = APIRouter(prefix="/posts", tags=["posts"])


# =============================================================================
# Posts
# =============================================================================


@router.get("", response_model=list[PostResponse])
def list_posts(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> list[PostResponse]:
    return [PostResponse.model_validate(p) for p in post_service.list_posts(db, limit, offset)]


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreateRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> PostResponse:
    return PostResponse.model_validate(post_service.create_post(db, subject_id, payload))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: Session = Depends(get_db)) -> PostResponse:
    return PostResponse.model_validate(post_service.get_post(db, post_id))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    payload: PostUpdateRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> PostResponse:
    return PostResponse.model_validate(post_service.update_post(db, post_id, subject_id, payload))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> Response:
    post_service.delete_post(db, post_id, subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Comments
# =============================================================================


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(post_id: str, db: Session = Depends(get_db)) -> list[CommentResponse]:
    return [CommentResponse.model_validate(c) for c in post_service.list_comments(db, post_id)]


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: str,
    payload: CommentRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
    emitter: NotificationEmitter = Depends(get_notification_emitter),
) -> CommentResponse:
    result = post_service.add_comment(db, emitter, post_id, subject_id, payload.content)
    logger.debug("comment_notification", outcome=result.side_effect.value)
    return CommentResponse.model_validate(result.value)


@router.put("/{post_id}/comments/{comment_id}", response_model=CommentResponse)
def update_comment(
    post_id: str,
    comment_id: str,
    payload: CommentRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> CommentResponse:
    comment = post_service.update_comment(db, post_id, comment_id, subject_id, payload.content)
    return CommentResponse.model_validate(comment)


# =============================================================================
# Likes
# =============================================================================


@router.get("/{post_id}/likes", response_model=list[LikeResponse])
def list_likes(post_id: str, db: Session = Depends(get_db)) -> list[LikeResponse]:
    return [LikeResponse.model_validate(like) for like in post_service.list_likes(db, post_id)]


@router.post("/{post_id}/likes", response_model=LikeResponse)
def add_like(
    post_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
    emitter: NotificationEmitter = Depends(get_notification_emitter),
) -> LikeResponse:
    result = post_service.add_like(db, emitter, post_id, subject_id)
    logger.debug("like_notification", outcome=result.side_effect.value)
    return LikeResponse.model_validate(result.value)


@router.delete("/{post_id}/likes", status_code=status.HTTP_204_NO_CONTENT)
def remove_like(
    post_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> Response:
    post_service.remove_like(db, post_id, subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
