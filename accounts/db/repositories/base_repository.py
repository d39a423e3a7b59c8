"""
Entity store - generic async data access over one model (find, delete, aggregate).
Challenge: Keep SQL generation, eager loading and paging in one place; repositories
compose a store instead of inheriting a wide CRUD surface.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Executable, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload

from accounts.db.base import Base
from accounts.db.predicates import build_where
from accounts.schemas.list_query import FindManyOptions

ModelType = TypeVar("ModelType", bound=Base)


class EntityStore(Generic[ModelType]):
    """Async store client for one model, bound to one session."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    def _select(
        self,
        where: Mapping[str, Any] | None = None,
        *,
        select_fields: Mapping[str, bool] | None = None,
        relations: Sequence[str] | None = None,
        take: int | None = None,
        skip: int | None = None,
    ):
        stmt = select(self.model).where(*build_where(self.model, where))
        columns = [getattr(self.model, name) for name, wanted in (select_fields or {}).items() if wanted]
        if columns:
            # populate_existing: objects already in the session are narrowed to the projection too
            stmt = stmt.options(load_only(*columns)).execution_options(populate_existing=True)
        for name in relations or ():
            # selectinload: one extra query per relation, no N+1
            stmt = stmt.options(selectinload(getattr(self.model, name)))
        if take is not None or skip is not None:
            # Paging needs a stable order; primary key is unique
            stmt = stmt.order_by(*self.model.__mapper__.primary_key)
        if skip:
            stmt = stmt.offset(skip)
        if take:
            stmt = stmt.limit(take)
        return stmt

    async def find(
        self,
        where: Mapping[str, Any] | None = None,
        *,
        select: Mapping[str, bool] | None = None,
        relations: Sequence[str] | None = None,
        take: int | None = None,
        skip: int | None = None,
    ) -> list[ModelType]:
        """Fetch all rows matching ``where``."""
        stmt = self._select(where, select_fields=select, relations=relations, take=take, skip=skip)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_many(self, options: FindManyOptions) -> list[ModelType]:
        """Run a shaped options object (see UserRepository.to_find_many_options)."""
        return await self.find(
            options.where,
            select=options.select,
            relations=options.relations,
            take=options.take,
            skip=options.skip,
        )

    async def find_one(
        self,
        where: Mapping[str, Any],
        *,
        relations: Sequence[str] | None = None,
    ) -> ModelType | None:
        """Fetch the first row matching ``where``, or None."""
        stmt = self._select(where, relations=relations).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def delete(self, where: Mapping[str, Any]) -> int:
        """Bulk DELETE matching ``where``. Returns the number of deleted rows.

        Objects already loaded in the session are not expunged.
        """
        stmt = delete(self.model).where(*build_where(self.model, where))
        result = await self.session.execute(stmt, execution_options={"synchronize_session": False})
        return result.rowcount

    async def aggregate(self, statement: Executable) -> list[Mapping[str, Any]]:
        """Run a raw aggregate statement and return rows as mappings."""
        result = await self.session.execute(statement)
        return list(result.mappings().all())
