"""
Learning plan model.

A plan belongs to one user and carries its lessons inline as a JSON list, one
dict per lesson: {"title", "description", "video_id", "document_ids"}.
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utcnow


class LearningPlan(Base):
    __tablename__ = "learning_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    title: Mapped[str] = mapped_column(String(512))
    thumbnail: Mapped[Optional[str]] = mapped_column(String(1024))
    skill: Mapped[Optional[str]] = mapped_column(String(128), index=True)
    skill_level: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    lessons: Mapped[List[dict[str, Any]]] = mapped_column(JSON, default=list)
    duration: Mapped[Optional[str]] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<LearningPlan id={self.id!r} skill={self.skill!r}>"
