import threading

import pytest
from sqlalchemy import text
from sqlalchemy.pool import QueuePool, StaticPool

from skillshare.db import db, is_memory_sqlite
from skillshare.models import User


def _user(email: str) -> User:
    return User(email=email, password_hash="x", following=[], followers=[])


def test_session_commits_on_success():
    db.initialize("sqlite://")
    db.create_all_tables()

    with db.session() as session:
        session.add(_user("commit@example.com"))

    with db.session() as session:
        assert session.query(User).filter(User.email == "commit@example.com").count() == 1


def test_session_rolls_back_on_error():
    db.initialize("sqlite://")
    db.create_all_tables()

    try:
        with db.session() as session:
            session.add(_user("rollback@example.com"))
            session.flush()
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    with db.session() as session:
        assert session.query(User).filter(User.email == "rollback@example.com").count() == 0


def test_savepoint_rollback_keeps_outer_work(test_session):
    test_session.add(_user("outer@example.com"))
    test_session.flush()

    try:
        with test_session.begin_nested():
            test_session.add(_user("inner@example.com"))
            test_session.flush()
            raise RuntimeError("inner failure")
    except RuntimeError:
        pass

    emails = {row[0] for row in test_session.execute(text("SELECT email FROM users"))}
    assert emails == {"outer@example.com"}


def test_health_check():
    db.initialize("sqlite://")

    result = db.health_check()

    assert result["healthy"] is True
    assert result["error"] is None


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite://", True),
        ("sqlite:///:memory:", True),
        ("sqlite:///file:shared?mode=memory&uri=true", True),
        ("sqlite:///skillshare.db", False),
        ("sqlite:////var/lib/skillshare.db", False),
        ("postgresql://u:p@localhost/skillshare", False),
    ],
)
def test_is_memory_sqlite(url, expected):
    assert is_memory_sqlite(url) is expected


@pytest.fixture
def file_db(tmp_path):
    db.reset()
    db.initialize(f"sqlite:///{tmp_path / 'concurrent.db'}")
    db.create_all_tables()
    yield db
    db.reset()


def test_file_database_uses_connection_pool(file_db):
    assert isinstance(file_db.engine.pool, QueuePool)
    assert not isinstance(file_db.engine.pool, StaticPool)


def test_concurrent_sessions_on_file_database(file_db):
    barrier = threading.Barrier(2)
    connections: list[int] = []
    errors: list[str] = []

    def worker():
        try:
            with file_db.session() as session:
                session.execute(text("SELECT COUNT(*) FROM users"))
                connections.append(id(session.connection().connection.dbapi_connection))
                # Both transactions are open at this point
                barrier.wait(timeout=5)
        except Exception as e:
            errors.append(f"{type(e).__name__}: {e}")
            barrier.abort()

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert len(set(connections)) == 2

    with file_db.session() as session:
        session.add(_user("after@example.com"))
    with file_db.session() as session:
        assert session.query(User).filter(User.email == "after@example.com").count() == 1
