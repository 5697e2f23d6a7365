"""
User profile and social graph endpoints.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from skillshare.db import get_db
from skillshare.logging import get_logger
from skillshare.services import NotificationEmitter, SocialGraphMutator

from ..auth.dependencies import get_current_subject, get_notification_emitter, get_social_graph
from ..schemas import (
    FollowCountsResponse,
    ProfileUpdateRequest,
    PublicUserResponse,
    UserResponse,
)
from ..services import user_service

logger = get_logger("users")

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[PublicUserResponse])
def list_users(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> list[PublicUserResponse]:
    users = user_service.list_users(db, limit=limit, offset=offset)
    return [PublicUserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=PublicUserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)) -> PublicUserResponse:
    return PublicUserResponse.model_validate(user_service.get_user(db, user_id))


@router.get("/{user_id}/private", response_model=UserResponse)
def get_private_profile(user_id: str, db: Session = Depends(get_db)) -> UserResponse:
    """Full profile. The gate only lets the owner through."""
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: ProfileUpdateRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = user_service.update_profile(db, user_id, subject_id, payload)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> Response:
    user_service.delete_account(db, user_id, subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/follow", response_model=FollowCountsResponse)
def follow(
    user_id: str,
    subject_id: str = Depends(get_current_subject),
    graph: SocialGraphMutator = Depends(get_social_graph),
    emitter: NotificationEmitter = Depends(get_notification_emitter),
) -> FollowCountsResponse:
    result = user_service.follow_user(graph, emitter, subject_id, user_id)
    logger.debug("follow_notification", outcome=result.side_effect.value)
    return FollowCountsResponse.model_validate(result.value, from_attributes=True)


@router.delete("/{user_id}/follow", response_model=FollowCountsResponse)
def unfollow(
    user_id: str,
    subject_id: str = Depends(get_current_subject),
    graph: SocialGraphMutator = Depends(get_social_graph),
) -> FollowCountsResponse:
    counts = user_service.unfollow_user(graph, subject_id, user_id)
    return FollowCountsResponse.model_validate(counts, from_attributes=True)


@router.get("/{user_id}/followers", response_model=list[PublicUserResponse])
def list_followers(user_id: str, db: Session = Depends(get_db)) -> list[PublicUserResponse]:
    return [PublicUserResponse.model_validate(u) for u in user_service.list_followers(db, user_id)]


@router.get("/{user_id}/following", response_model=list[PublicUserResponse])
def list_following(user_id: str, db: Session = Depends(get_db)) -> list[PublicUserResponse]:
    return [PublicUserResponse.model_validate(u) for u in user_service.list_following(db, user_id)]
