"""Repository for learning plans."""

from skillshare.models import LearningPlan

from .base import BaseRepository


class LearningPlanRepository(BaseRepository[LearningPlan]):
    """Repository for LearningPlan operations."""

    model = LearningPlan

    def list_for_user(self, user_id: str) -> list[LearningPlan]:
        return (
            self.session.query(LearningPlan)
            .filter(LearningPlan.user_id == user_id)
            .order_by(LearningPlan.created_at.desc())
            .all()
        )

    def list_by_skill(
        self,
        skill: str | None = None,
        skill_level: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[LearningPlan]:
        """Plans matching every filter given. Exact, case-sensitive matches."""
        query = self.session.query(LearningPlan)
        if skill is not None:
            query = query.filter(LearningPlan.skill == skill)
        if skill_level is not None:
            query = query.filter(LearningPlan.skill_level == skill_level)
        return (
            query.order_by(LearningPlan.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
