"""
Base repository with common CRUD operations.

Provides generic database operations for all feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Storage failures are re-raised as DatabaseError so callers only deal
with the application error taxonomy.

Usage:
    class AthleteRepository(BaseRepository[Athlete]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Athlete)

        async def get_team(self, athlete_id: str) -> str | None:
            athlete = await self.get_by_id(athlete_id)
            return athlete.team if athlete else None
"""

from typing import TypeVar, Generic, Type, Sequence

from sqlalchemy import select, func, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.errors import DatabaseError

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Provides common CRUD methods that can be inherited by feature repositories.
    All methods are async for use with AsyncSession.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def _execute(self, statement, action: str):
        """Execute a statement, wrapping driver errors in DatabaseError."""
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to {action}: {e}") from e

    async def get_by_id(self, id: str | int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        result = await self._execute(
            select(self.model).where(self.model.id == id),
            f"get {self.model.__name__} by id",
        )
        return result.scalar_one_or_none()

    async def count(self, **kwargs) -> int:
        """
        Count entities matching criteria.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            Number of matching entities
        """
        query = select(func.count()).select_from(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        result = await self._execute(query, f"count {self.model.__name__} rows")
        return result.scalar() or 0

    # -------------------------------------------------------------------------
    # Set-oriented writes
    # -------------------------------------------------------------------------

    def _dialect_insert(self):
        """Return the dialect-specific INSERT construct (supports ON CONFLICT)."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self.model)
        if dialect == "sqlite":
            return sqlite.insert(self.model)
        raise DatabaseError(f"Unsupported database dialect: {dialect}")

    async def insert_ignore(self, rows: Sequence[dict]) -> int:
        """
        Insert rows in one statement, skipping rows whose primary key exists.

        Args:
            rows: Column name-value mappings

        Returns:
            Number of rows actually inserted
        """
        if not rows:
            return 0

        statement = self._dialect_insert().values(list(rows))
        statement = statement.on_conflict_do_nothing(
            index_elements=[self.model.id]
        )
        result = await self._execute(
            statement, f"batch insert {self.model.__name__} rows"
        )
        await self.db.flush()
        return result.rowcount

    async def upsert(self, row: dict, update_columns: Sequence[str]) -> None:
        """
        Insert a row or overwrite the given columns of the existing row.

        Args:
            row: Column name-value mapping (must include the primary key)
            update_columns: Columns overwritten on conflict
        """
        statement = self._dialect_insert().values(**row)
        statement = statement.on_conflict_do_update(
            index_elements=[self.model.id],
            set_={column: statement.excluded[column] for column in update_columns},
        )
        await self._execute(statement, f"upsert {self.model.__name__}")
        await self.db.flush()


async def ping(db: AsyncSession) -> None:
    """Run `SELECT 1` against the database."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DatabaseError(f"Health check failed: {e}") from e
