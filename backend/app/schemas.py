"""
Pydantic schemas for request and response validation.
"""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Auth
# =============================================================================


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    birthday: str | None = None
    avatar_url: str | None = None

    @field_validator("email")
    @classmethod
    def check_email_format(cls, v: str) -> str:
        # Stored exactly as given; login matches on the same string
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return v


# =============================================================================
# Users
# =============================================================================


class PublicUserResponse(BaseModel):
    """Profile as anyone may see it. No email, address or birthday."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    followers_count: int = 0
    following_count: int = 0
    created_at: datetime | None = None


class UserResponse(PublicUserResponse):
    """Full profile, returned only to its owner."""

    email: str
    address: str | None = None
    birthday: str | None = None


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    birthday: str | None = None
    avatar_url: str | None = None
    bio: str | None = None


class FollowCountsResponse(BaseModel):
    followers_count: int
    following_count: int


# =============================================================================
# Posts, comments, likes
# =============================================================================


class PostCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    content: str | None = None
    type: str | None = Field(default=None, max_length=64)


class PostUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=512)
    content: str | None = None
    type: str | None = Field(default=None, max_length=64)


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str | None = None
    type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommentRequest(BaseModel):
    content: str = Field(min_length=1)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    user_id: str
    created_at: datetime | None = None


# =============================================================================
# Learning plans
# =============================================================================


class LessonSchema(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    description: str | None = None
    video_id: str | None = None
    document_ids: list[str] = Field(default_factory=list)


class LearningPlanCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    thumbnail: str | None = Field(default=None, max_length=1024)
    skill: str | None = Field(default=None, max_length=128)
    skill_level: str | None = Field(default=None, max_length=64)
    description: str | None = None
    lessons: list[LessonSchema] = Field(default_factory=list)
    duration: str | None = Field(default=None, max_length=64)


class LearningPlanUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=512)
    thumbnail: str | None = Field(default=None, max_length=1024)
    skill: str | None = Field(default=None, max_length=128)
    skill_level: str | None = Field(default=None, max_length=64)
    description: str | None = None
    lessons: list[LessonSchema] | None = None
    duration: str | None = Field(default=None, max_length=64)


class LearningPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    thumbnail: str | None = None
    skill: str | None = None
    skill_level: str | None = None
    description: str | None = None
    lessons: list[LessonSchema] = Field(default_factory=list)
    duration: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Notifications
# =============================================================================


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    message: str
    action_user_id: str
    post_id: str | None = None
    comment_id: str | None = None
    read: bool = False
    created_at: datetime | None = None


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
