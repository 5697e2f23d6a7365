"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillshare.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id("3f2c...")
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def _column(self, key: str):
        if not hasattr(self.model, key):
            raise ValueError(f"Unknown filter key: {key}")
        return getattr(self.model, key)

    def get_by_id(self, id: str) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def get_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        """Get all records with pagination."""
        return self.session.query(self.model).offset(offset).limit(limit).all()

    def create(self, **kwargs) -> T:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def save(self, instance: T) -> T:
        """Persist a new or modified record."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def update(self, id: str, **kwargs) -> T | None:
        """Update an existing record."""
        instance = self.get_by_id(id)
        if instance:
            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)
            self.session.flush()
        return instance

    def delete(self, id: str) -> bool:
        """Delete a record by ID."""
        instance = self.get_by_id(id)
        if instance:
            self.session.delete(instance)
            self.session.flush()
            return True
        return False

    def count(self, **filters) -> int:
        """Get count of records, optionally filtered."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        return query.scalar() or 0

    def exists(self, id: str) -> bool:
        """Check if a record exists."""
        return self.exists_where(id=id)

    def exists_where(self, **filters) -> bool:
        """Check if any record exists matching filters."""
        query = self.session.query(self.model)
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        result = self.session.query(query.exists()).scalar()
        return bool(result) if result is not None else False
