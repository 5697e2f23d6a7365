"""Repositories for posts, comments and likes."""

from skillshare.models import Comment, Like, Post

from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post operations."""

    model = Post

    def list_recent(self, limit: int = 100, offset: int = 0) -> list[Post]:
        return (
            self.session.query(Post)
            .order_by(Post.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def list_for_user(self, user_id: str) -> list[Post]:
        return (
            self.session.query(Post)
            .filter(Post.user_id == user_id)
            .order_by(Post.created_at.desc())
            .all()
        )


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations."""

    model = Comment

    def list_for_post(self, post_id: str) -> list[Comment]:
        return (
            self.session.query(Comment)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc())
            .all()
        )

    def delete_for_post(self, post_id: str) -> int:
        result = self.session.query(Comment).filter(Comment.post_id == post_id).delete()
        self.session.flush()
        return result


class LikeRepository(BaseRepository[Like]):
    """Repository for Like operations."""

    model = Like

    def list_for_post(self, post_id: str) -> list[Like]:
        return self.session.query(Like).filter(Like.post_id == post_id).all()

    def get_by_post_and_user(self, post_id: str, user_id: str) -> Like | None:
        return (
            self.session.query(Like)
            .filter(Like.post_id == post_id, Like.user_id == user_id)
            .first()
        )

    def delete_by_post_and_user(self, post_id: str, user_id: str) -> bool:
        result = (
            self.session.query(Like)
            .filter(Like.post_id == post_id, Like.user_id == user_id)
            .delete()
        )
        self.session.flush()
        return result > 0

    def delete_for_post(self, post_id: str) -> int:
        result = self.session.query(Like).filter(Like.post_id == post_id).delete()
        self.session.flush()
        return result
