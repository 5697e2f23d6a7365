"""
User-related SQLAlchemy models.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utcnow


class User(Base):
    """
    User model, one row per identity document.

    following/followers hold ids of other users. They are plain id lists, not
    foreign keys, so deleting a user leaves dangling ids behind in other rows.

    Every UPDATE is guarded by version_id. A writer holding a stale copy gets
    StaleDataError on flush instead of silently overwriting a concurrent change.

    Lists are JSON columns: always assign a new list, never mutate in place,
    or the change is not detected.

    Attributes:
        email: Unique, compared case-sensitively as stored
        password_hash: Opaque one-way hash, never returned by the API
        following: Ids this user follows
        followers: Ids following this user
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    last_name: Mapped[Optional[str]] = mapped_column(String(255))
    address: Mapped[Optional[str]] = mapped_column(String(512))
    birthday: Mapped[Optional[str]] = mapped_column(String(32))
    avatar_url: Mapped[Optional[str]] = mapped_column(String(512))
    bio: Mapped[Optional[str]] = mapped_column(Text)
    following: Mapped[List[str]] = mapped_column("following_ids", JSON, default=list)
    followers: Mapped[List[str]] = mapped_column("follower_ids", JSON, default=list)
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def followers_count(self) -> int:
        return len(self.followers)

    @property
    def following_count(self) -> int:
        return len(self.following)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r}>"
