"""Row-level persistence gateway.

A thin wrapper around the async session exposing select/count/insert/update
against the application tables by name. Every write is committed on its own;
there is no multi-statement transaction across calls.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.exceptions.base import PersistenceError
from models import Conversation, Mentor, Message, Profile, ProgressTracking

logger = logging.getLogger(__name__)

TABLES = {
    "profiles": Profile,
    "mentors": Mentor,
    "conversations": Conversation,
    "messages": Message,
    "progress_tracking": ProgressTracking,
}


class PersistenceGateway:
    """CRUD access to the five application tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | Sequence[str] | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        since: dict[str, Any] | None = None,
        load: Iterable[str] = (),
    ) -> list[Any]:
        """Select rows matching equality ``filters`` and lower bounds in ``since``.

        Args:
            table: Table name, one of ``TABLES``.
            filters: Column name to required value.
            order_by: Column name(s) to order by.
            descending: Order direction for every ``order_by`` column.
            limit: Maximum number of rows.
            offset: Rows to skip.
            since: Column name to inclusive lower bound.
            load: Relationship names to eager-load.

        Returns:
            List of ORM rows.
        """
        model = self._model(table)
        query = self._filtered(select(model), model, filters, since)

        if order_by:
            columns = [order_by] if isinstance(order_by, str) else list(order_by)
            for name in columns:
                column = self._column(model, name)
                query = query.order_by(column.desc() if descending else column.asc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        for relationship_name in load:
            query = query.options(selectinload(getattr(model, relationship_name)))

        try:
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failure("select", table, e) from e

    async def select_one(
        self, table: str, filters: dict[str, Any], load: Iterable[str] = ()
    ) -> Any | None:
        """Return the single row matching ``filters`` or None."""
        rows = await self.select(table, filters=filters, limit=1, load=load)
        return rows[0] if rows else None

    async def count(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        since: dict[str, Any] | None = None,
    ) -> int:
        model = self._model(table)
        query = self._filtered(select(func.count(model.id)), model, filters, since)
        try:
            result = await self.db.execute(query)
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._failure("count", table, e) from e

    async def insert(self, table: str, values: dict[str, Any]) -> Any:
        """Insert one row and return it refreshed from the database."""
        model = self._model(table)
        row = model(**self._attributes(values))
        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
            return row
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._failure("insert", table, e) from e

    async def update(self, table: str, row_id: UUID, values: dict[str, Any]) -> Any | None:
        """Update one row by id. Returns None when the row does not exist."""
        model = self._model(table)
        try:
            row = await self.db.get(model, row_id)
            if row is None:
                return None
            for key, value in self._attributes(values).items():
                self._column(model, key)
                setattr(row, key, value)
            await self.db.commit()
            await self.db.refresh(row)
            return row
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._failure("update", table, e) from e

    # Private helper methods

    def _filtered(self, query, model, filters, since):
        for name, value in (filters or {}).items():
            query = query.where(self._column(model, name) == value)
        for name, lower in (since or {}).items():
            query = query.where(self._column(model, name) >= lower)
        return query

    @staticmethod
    def _model(table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    @staticmethod
    def _attributes(values: dict[str, Any]) -> dict[str, Any]:
        # "metadata" is reserved on declarative classes; the ORM attribute is "extra"
        return {("extra" if key == "metadata" else key): value for key, value in values.items()}

    @staticmethod
    def _column(model, name: str):
        attribute = "extra" if name == "metadata" else name
        column = getattr(model, attribute, None)
        if column is None:
            raise ValueError(f"Unknown column {name!r} on {model.__tablename__}")
        return column

    @staticmethod
    def _failure(operation: str, table: str, error: SQLAlchemyError) -> PersistenceError:
        logger.error(f"Persistence {operation} on {table} failed: {str(error)}")
        return PersistenceError(
            f"Failed to {operation} {table}",
            details={"operation": operation, "table": table},
        )
