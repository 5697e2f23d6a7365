"""User repository for authentication and the social graph."""

from skillshare.logging import get_logger
from skillshare.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    """
    Repository for User operations.

    Email lookups are exact matches: "Alice@example.com" and
    "alice@example.com" are different identities, in line with the unique index.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        return self.session.query(User).filter(User.email == email).first()

    def exists_by_email(self, email: str) -> bool:
        return self.exists_where(email=email)

    def get_many(self, ids: list[str]) -> list[User]:
        """
        Get users by id, in the order given.

        Ids with no matching row (deleted accounts) are skipped.
        """
        if not ids:
            return []
        found = {user.id: user for user in self.session.query(User).filter(User.id.in_(ids)).all()}
        return [found[user_id] for user_id in ids if user_id in found]

    def get_current(self, id: str) -> User | None:
        """
        Get the latest stored version of a user.

        Overwrites any copy already held by the session, so a retry after a
        version conflict works against fresh data.
        """
        return self.session.get(User, id, populate_existing=True)
