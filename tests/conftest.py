"""
Pytest fixtures for SkillShare tests.

Every test gets a fresh in-memory SQLite database. The environment is set
before any skillshare import so cached settings pick it up.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-skillshare-suite-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Callable  # noqa: E402

import pytest  # noqa: E402
from argon2 import PasswordHasher as Argon2Hasher  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from skillshare.config import TokenConfig  # noqa: E402
from skillshare.db import Base, configure_sqlite_engine  # noqa: E402
from skillshare.models import Post, User  # noqa: E402
from skillshare.security import PasswordHasher, TokenService  # noqa: E402

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    import skillshare.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    configure_sqlite_engine(engine)
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    yield "sqlite://", TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(secret=TEST_SECRET)


@pytest.fixture
def token_service(token_config) -> TokenService:
    return TokenService(token_config)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Argon2 with minimal cost so the suite stays fast."""
    return PasswordHasher(Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def make_user(test_session: Session, password_hasher) -> Callable[..., User]:
    """Factory that stores a user directly, bypassing registration."""
    counter = {"n": 0}

    def _make(email: str | None = None, password: str = "pw123", **fields) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=password_hasher.hash(password),
            first_name=fields.pop("first_name", f"User{counter['n']}"),
            following=fields.pop("following", []),
            followers=fields.pop("followers", []),
            **fields,
        )
        test_session.add(user)
        test_session.flush()
        return user

    return _make


@pytest.fixture
def make_post(test_session: Session) -> Callable[..., Post]:
    def _make(owner: User, title: str = "Learning Rust", **fields) -> Post:
        post = Post(user_id=owner.id, title=title, **fields)
        test_session.add(post)
        test_session.flush()
        return post

    return _make
