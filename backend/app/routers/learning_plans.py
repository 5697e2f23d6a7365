"""
Learning plan endpoints.

Every route needs a token. Updates and deletes are limited to the plan's owner.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from skillshare.db import get_db

from ..auth.dependencies import get_current_subject
from ..schemas import LearningPlanCreateRequest, LearningPlanResponse, LearningPlanUpdateRequest
from ..services import learning_plan_service

router = APIRouter(prefix="/learning-plans", tags=["learning-plans"])


@router.get("", response_model=list[LearningPlanResponse])
def list_plans(
    skill: str | None = Query(None),
    skill_level: str | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> list[LearningPlanResponse]:
    plans = learning_plan_service.list_plans(db, skill, skill_level, limit, offset)
    return [LearningPlanResponse.model_validate(p) for p in plans]


@router.get("/my-plans", response_model=list[LearningPlanResponse])
def list_my_plans(
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> list[LearningPlanResponse]:
    plans = learning_plan_service.list_my_plans(db, subject_id)
    return [LearningPlanResponse.model_validate(p) for p in plans]


@router.post("", response_model=LearningPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: LearningPlanCreateRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> LearningPlanResponse:
    return LearningPlanResponse.model_validate(
        learning_plan_service.create_plan(db, subject_id, payload)
    )


@router.get("/{plan_id}", response_model=LearningPlanResponse)
def get_plan(plan_id: str, db: Session = Depends(get_db)) -> LearningPlanResponse:
    return LearningPlanResponse.model_validate(learning_plan_service.get_plan(db, plan_id))


@router.put("/{plan_id}", response_model=LearningPlanResponse)
def update_plan(
    plan_id: str,
    payload: LearningPlanUpdateRequest,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> LearningPlanResponse:
    return LearningPlanResponse.model_validate(
        learning_plan_service.update_plan(db, plan_id, subject_id, payload)
    )


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan(
    plan_id: str,
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> Response:
    learning_plan_service.delete_plan(db, plan_id, subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
