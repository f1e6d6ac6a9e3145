"""
Base CRUD operations for SQLAlchemy models.

Provides generic read and write operations that can be
inherited and extended by model-specific CRUD classes. Primary keys are
strings (chunk ids, prompt names).

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from landmark_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses specify the model class and can extend these methods for
    model-specific behavior. Methods never commit; the caller owns the
    transaction.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
        pk: Primary key column of the model
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model
        self.pk = inspect(model).primary_key[0]

    async def upsert(self, session: AsyncSession, **kwargs: Any) -> None:
        """
        Insert a record or overwrite the existing one with the same key.

        Args:
            session: Async database session
            **kwargs: Model field values, primary key included
        """
        stmt = sqlite_insert(self.model).values(**kwargs)
        updates = {name: stmt.excluded[name] for name in kwargs if name != self.pk.key}
        if updates:
            stmt = stmt.on_conflict_do_update(index_elements=[self.pk.key], set_=updates)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[self.pk.key])
        await session.execute(stmt)

    async def get_by_id(self, session: AsyncSession, id: str) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: Primary key value

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.pk == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, session: AsyncSession, ids: Sequence[str]) -> Sequence[ModelT]:
        """
        Retrieve records whose primary key is in `ids` (order not guaranteed).

        Args:
            session: Async database session
            ids: Primary key values

        Returns:
            Sequence of model instances found
        """
        if not ids:
            return []
        stmt = select(self.model).where(self.pk.in_(list(ids)))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records ordered by primary key with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).order_by(self.pk).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession) -> int:
        """Number of rows in the table."""
        result = await session.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    async def delete_all(self, session: AsyncSession) -> int:
        """
        Delete every record.

        Returns:
            int: Number of rows deleted
        """
        result = await session.execute(delete(self.model))
        return result.rowcount or 0
