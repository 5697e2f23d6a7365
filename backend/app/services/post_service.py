"""
Post, comment and like service functions.

Comments and new likes notify the post owner through the NotificationEmitter.
The emitter never raises, so the returned WriteResult always carries the
created comment or like, whatever happened to the notification.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillshare.exceptions import NotFoundError
from skillshare.logging import get_logger
from skillshare.models import Comment, Like, Post
from skillshare.repositories import CommentRepository, LikeRepository, PostRepository
from skillshare.security import ensure_owner
from skillshare.services import EmitOutcome, NotificationEmitter, WriteResult

from ..schemas import PostCreateRequest, PostUpdateRequest

logger = get_logger("backend.posts")


# =============================================================================
# Posts
# =============================================================================


def list_posts(db: Session, limit: int = 100, offset: int = 0) -> list[Post]:
    return PostRepository(db).list_recent(limit=limit, offset=offset)


def get_post(db: Session, post_id: str) -> Post:
    """Fetch a post or raise NotFoundError."""
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


def create_post(db: Session, user_id: str, payload: PostCreateRequest) -> Post:
    post = PostRepository(db).create(
        user_id=user_id,
        title=payload.title,
        content=payload.content,
        type=payload.type,
    )
    logger.info("post_created", post_id=post.id, user_id=user_id)
    return post


def update_post(db: Session, post_id: str, subject_id: str, payload: PostUpdateRequest) -> Post:
    post = get_post(db, post_id)
    ensure_owner(subject_id, post.user_id, "post")

    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(post, key, value)
    PostRepository(db).save(post)

    logger.info("post_updated", post_id=post.id, fields=sorted(changes))
    return post


def delete_post(db: Session, post_id: str, subject_id: str) -> None:
    """Delete a post together with its comments and likes."""
    post = get_post(db, post_id)
    ensure_owner(subject_id, post.user_id, "post")

    comments_deleted = CommentRepository(db).delete_for_post(post.id)
    likes_deleted = LikeRepository(db).delete_for_post(post.id)
    PostRepository(db).delete(post.id)

    logger.info(
        "post_deleted",
        post_id=post_id,
        comments_deleted=comments_deleted,
        likes_deleted=likes_deleted,
    )


# =============================================================================
# Comments
# =============================================================================


def list_comments(db: Session, post_id: str) -> list[Comment]:
    get_post(db, post_id)
    return CommentRepository(db).list_for_post(post_id)


def add_comment(
    db: Session,
    emitter: NotificationEmitter,
    post_id: str,
    user_id: str,
    content: str,
) -> WriteResult[Comment]:
    """Create a comment and notify the post owner."""
    get_post(db, post_id)
    comment = CommentRepository(db).create(post_id=post_id, user_id=user_id, content=content)
    logger.info("comment_created", comment_id=comment.id, post_id=post_id)

    return WriteResult(value=comment, side_effect=emitter.on_comment(comment))


def update_comment(
    db: Session,
    post_id: str,
    comment_id: str,
    subject_id: str,
    content: str,
) -> Comment:
    comments = CommentRepository(db)
    comment = comments.get_by_id(comment_id)
    if comment is None or comment.post_id != post_id:
        raise NotFoundError("Comment", comment_id)
    ensure_owner(subject_id, comment.user_id, "comment")

    comment.content = content
    comments.save(comment)
    return comment


# =============================================================================
# Likes
# =============================================================================


def list_likes(db: Session, post_id: str) -> list[Like]:
    get_post(db, post_id)
    return LikeRepository(db).list_for_post(post_id)


def add_like(
    db: Session,
    emitter: NotificationEmitter,
    post_id: str,
    user_id: str,
) -> WriteResult[Like]:
    """
    Like a post. Idempotent per user.

    Only a newly created like notifies the post owner.
    """
    get_post(db, post_id)
    likes = LikeRepository(db)

    existing = likes.get_by_post_and_user(post_id, user_id)
    if existing is not None:
        return WriteResult(value=existing, side_effect=EmitOutcome.SKIPPED)

    try:
        with db.begin_nested():
            like = likes.create(post_id=post_id, user_id=user_id)
    except IntegrityError:
        # Lost a race with a concurrent like from the same user
        existing = likes.get_by_post_and_user(post_id, user_id)
        if existing is None:
            raise
        return WriteResult(value=existing, side_effect=EmitOutcome.SKIPPED)

    logger.info("like_created", like_id=like.id, post_id=post_id)
    return WriteResult(value=like, side_effect=emitter.on_like(like))


def remove_like(db: Session, post_id: str, user_id: str) -> bool:
    """Remove the caller's like. Returns False if there was none."""
    get_post(db, post_id)
    removed = LikeRepository(db).delete_by_post_and_user(post_id, user_id)
    if removed:
        logger.info("like_removed", post_id=post_id)
    return removed
