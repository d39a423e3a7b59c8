"""
User repository - all user queries in one place (lookups, bulk deletes, role counts).
Challenge: Translate id/email lists and list requests into store criteria without
leaking SQL into services.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.db.models import ROLE_OWNER, User
from accounts.db.predicates import In, IsNull, Not
from accounts.db.repositories.base_repository import EntityStore
from accounts.schemas.list_query import FindManyOptions, ListQueryOptions

logger = logging.getLogger(__name__)

AUTH_IDENTITIES = "auth_identities"


class UserRepository:
    """User-specific queries. Holds an EntityStore bound to the caller's session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.store = EntityStore(session, User)

    async def find_many_by_ids(self, user_ids: Iterable[str]) -> list[User]:
        return await self.store.find({"id": In(user_ids)})

    async def delete_all_except(self, user: User) -> int:
        """Delete every user except ``user``. Used when resetting an instance to its owner."""
        deleted = await self.store.delete({"id": Not(user.id)})
        logger.info("delete_all_except: kept user id=%s, deleted %d users", user.id, deleted)
        return deleted

    async def get_by_ids(self, transaction: AsyncSession, ids: Iterable[str]) -> list[User]:
        """Fetch users inside the caller's transaction (not this repository's session)."""
        return await EntityStore(transaction, User).find({"id": In(ids)})

    async def find_many_by_email(self, emails: Iterable[str]) -> list[User]:
        """Only email, password and id are loaded; other columns stay deferred.

        Users already in the session are refreshed to the same projection, so unflushed
        changes on them are overwritten.
        """
        return await self.store.find(
            {"email": In(emails)},
            select={"email": True, "password": True, "id": True},
        )

    async def delete_many(self, user_ids: Iterable[str]) -> int:
        deleted = await self.store.delete({"id": In(user_ids)})
        logger.info("delete_many: deleted %d users", deleted)
        return deleted

    async def find_non_shell_user(self, email: str) -> User | None:
        """User with this email that has a local password, with auth identities loaded."""
        return await self.store.find_one(
            {"email": email, "password": Not(IsNull())},
            relations=[AUTH_IDENTITIES],
        )

    async def count_users_by_role(self) -> dict[str, int]:
        """Counts users per role, e.g. ``{"admin": 2, "member": 6, "owner": 1}``."""
        rows = await self.store.aggregate(
            select(User.role, func.count(User.role).label("count")).group_by(User.role)
        )
        # int() raises ValueError on a malformed count; not defaulted
        return {row["role"]: int(row["count"]) for row in rows}

    def to_find_many_options(self, list_query_options: ListQueryOptions | None = None) -> FindManyOptions:
        """Shape a list request into store options.

        - no request: load auth identities only
        - ``take`` without ``select``: load auth identities for the default list view
        - ``take`` with ``select``: always project ``id``, paging orders by it
        - ``filter.is_owner``: rewritten to a role constraint, never passed as a column
        """
        find_many_options = FindManyOptions()

        if list_query_options is None:
            find_many_options.relations = [AUTH_IDENTITIES]
            return find_many_options

        take = list_query_options.take
        select_fields = list_query_options.select
        query_filter = list_query_options.filter

        if select_fields is not None:
            find_many_options.select = dict(select_fields)
        if take:
            find_many_options.take = take
        if list_query_options.skip:
            find_many_options.skip = list_query_options.skip

        if take and select_fields is None:
            find_many_options.relations = [AUTH_IDENTITIES]

        if take and select_fields is not None and not select_fields.get("id"):
            find_many_options.select = {**find_many_options.select, "id": True}

        if query_filter:
            other_filters = dict(query_filter)
            is_owner = other_filters.pop("is_owner", None)
            if is_owner is not None:
                other_filters["role"] = ROLE_OWNER if is_owner else Not(ROLE_OWNER)
            find_many_options.where = other_filters

        logger.debug("to_find_many_options: %r -> %r", list_query_options, find_many_options)
        return find_many_options

    async def find_many(self, list_query_options: ListQueryOptions | None = None) -> list[User]:
        """List users for a list request (see to_find_many_options)."""
        return await self.store.find_many(self.to_find_many_options(list_query_options))
