"""
Authentication Service.

Login checks credentials and issues a token. Registration checks email
uniqueness, hashes the password, persists the new identity and issues a token.
Both return a ProfileView, which never carries the password hash.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from skillshare.exceptions import DuplicateEmailError, InvalidCredentialError, NotFoundError
from skillshare.logging import get_logger
from skillshare.models import User
from skillshare.models.base import utcnow
from skillshare.repositories import UserRepository
from skillshare.security.passwords import PasswordHasher
from skillshare.security.tokens import TokenService

logger = get_logger("auth")


@dataclass(frozen=True)
class ProfileView:
    """Sanitized view of an identity, safe to return to its owner."""

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    address: str | None
    birthday: str | None
    avatar_url: str | None
    bio: str | None
    followers_count: int
    following_count: int
    created_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> "ProfileView":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            address=user.address,
            birthday=user.birthday,
            avatar_url=user.avatar_url,
            bio=user.bio,
            followers_count=user.followers_count,
            following_count=user.following_count,
            created_at=user.created_at,
        )


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: ProfileView


class AuthenticationService:
    """
    Orchestrates login and registration.

    Usage:
        with db.session() as session:
            auth = AuthenticationService(UserRepository(session), token_service)
            result = auth.register("alice@example.com", "pw123", "Alice", "Smith")
            result.token, result.user.id
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        passwords: PasswordHasher | None = None,
    ):
        self.users = users
        self.tokens = tokens
        self.passwords = passwords or PasswordHasher()

    def login(self, email: str, password: str) -> AuthResult:
        """
        Verify credentials and issue a token. Performs no writes.

        Raises:
            NotFoundError: No identity with this email.
            InvalidCredentialError: Password does not match.
        """
        logger.debug("login_attempt")
        user = self.users.get_by_email(email)
        if user is None:
            logger.info("login_failed", reason="unknown_email")
            raise NotFoundError("User")

        if not self.passwords.verify(password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialError("Invalid password")

        logger.info("login_succeeded", user_id=user.id)
        return AuthResult(token=self.tokens.issue(user.id, user.email), user=ProfileView.from_user(user))

    def register(
        self,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        address: str | None = None,
        birthday: str | None = None,
        avatar_url: str | None = None,
    ) -> AuthResult:
        """
        Create an identity and issue a token. Exactly one identity write.

        Not idempotent: a second call with the same email is rejected.

        Raises:
            DuplicateEmailError: Email already registered (exact, case-sensitive match).
        """
        logger.debug("register_attempt")
        if self.users.exists_by_email(email):
            logger.info("register_rejected", reason="duplicate_email")
            raise DuplicateEmailError()

        now = utcnow()
        user = User(
            email=email,
            password_hash=self.passwords.hash(password),
            first_name=first_name,
            last_name=last_name,
            address=address,
            birthday=birthday,
            avatar_url=avatar_url,
            following=[],
            followers=[],
            created_at=now,
            updated_at=now,
        )

        # A concurrent registration can pass the existence check; the unique index decides
        try:
            with self.users.session.begin_nested():
                self.users.save(user)
        except IntegrityError:
            logger.info("register_rejected", reason="duplicate_email_race")
            raise DuplicateEmailError() from None

        logger.info("register_succeeded", user_id=user.id)
        return AuthResult(token=self.tokens.issue(user.id, user.email), user=ProfileView.from_user(user))


__all__ = ["AuthenticationService", "AuthResult", "ProfileView"]
