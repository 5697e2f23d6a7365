from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.main import create_app
from skillshare.db import get_db

API = "/api"


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    _, TestingSessionLocal, _ = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def client(test_app_client) -> TestClient:
    return test_app_client[0]


@pytest.fixture
def register(client) -> Callable[..., dict]:
    """Register a user through the API. Returns the response body plus auth headers."""
    counter = {"n": 0}

    def _register(email: str | None = None, password: str = "pw123", **fields) -> dict:
        counter["n"] += 1
        payload = {
            "email": email or f"user{counter['n']}@example.com",
            "password": password,
            "first_name": fields.pop("first_name", f"User{counter['n']}"),
            **fields,
        }
        resp = client.post(f"{API}/auth/register", json=payload)
        assert resp.status_code == 201, resp.text
        body = resp.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return _register
