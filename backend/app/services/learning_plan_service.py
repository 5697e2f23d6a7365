"""
Learning plan service functions.

Any authenticated user may browse plans. Only the owner may edit or delete one.
"""

from sqlalchemy.orm import Session

from skillshare.exceptions import NotFoundError
from skillshare.logging import get_logger
from skillshare.models import LearningPlan
from skillshare.repositories import LearningPlanRepository
from skillshare.security import ensure_owner

from ..schemas import LearningPlanCreateRequest, LearningPlanUpdateRequest

logger = get_logger("backend.learning_plans")


def list_plans(
    db: Session,
    skill: str | None = None,
    skill_level: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[LearningPlan]:
    return LearningPlanRepository(db).list_by_skill(
        skill=skill, skill_level=skill_level, limit=limit, offset=offset
    )


def list_my_plans(db: Session, user_id: str) -> list[LearningPlan]:
    return LearningPlanRepository(db).list_for_user(user_id)


def get_plan(db: Session, plan_id: str) -> LearningPlan:
    """Fetch a plan or raise NotFoundError."""
    plan = LearningPlanRepository(db).get_by_id(plan_id)
    if plan is None:
        raise NotFoundError("Learning plan", plan_id)
    return plan


def create_plan(db: Session, user_id: str, payload: LearningPlanCreateRequest) -> LearningPlan:
    fields = payload.model_dump()
    plan = LearningPlanRepository(db).create(user_id=user_id, **fields)
    logger.info("learning_plan_created", plan_id=plan.id, user_id=user_id, lessons=len(plan.lessons))
    return plan


def update_plan(
    db: Session, plan_id: str, subject_id: str, payload: LearningPlanUpdateRequest
) -> LearningPlan:
    """Apply the fields present in the payload. Owner and id never change."""
    plan = get_plan(db, plan_id)
    ensure_owner(subject_id, plan.user_id, "learning plan")

    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(plan, key, value)
    LearningPlanRepository(db).save(plan)

    logger.info("learning_plan_updated", plan_id=plan.id, fields=sorted(changes))
    return plan


def delete_plan(db: Session, plan_id: str, subject_id: str) -> None:
    plan = get_plan(db, plan_id)
    ensure_owner(subject_id, plan.user_id, "learning plan")

    LearningPlanRepository(db).delete(plan.id)
    logger.info("learning_plan_deleted", plan_id=plan_id)
