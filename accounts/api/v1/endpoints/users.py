"""
User endpoints - paged user listing and role counts.
Design: Thin controller; UserRepository shapes and runs the query.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy import inspect

from accounts.config import get_settings
from accounts.db.models import User
from accounts.db.repositories.user_repository import UserRepository
from accounts.db.session import DbSession
from accounts.schemas.list_query import ListQueryOptions

router = APIRouter()
settings = get_settings()

# Never returned, even when projected
_HIDDEN_FIELDS = {"password"}

# Projectable names: mapped columns only, relations are not projectable
_USER_COLUMNS = frozenset(inspect(User).column_attrs.keys())


def _user_to_dict(user: User) -> dict[str, Any]:
    """Serialize only the attributes that were loaded (projection and relations aware)."""
    state = inspect(user)
    data = {
        attr.key: attr.loaded_value
        for attr in state.attrs
        if attr.key not in state.unloaded and attr.key not in _HIDDEN_FIELDS
    }
    if "auth_identities" in data:
        data["auth_identities"] = [
            {"provider_type": i.provider_type, "provider_id": i.provider_id}
            for i in data["auth_identities"]
        ]
    data["is_shell"] = user.is_shell if "password" not in state.unloaded else None
    return data


@router.get("")
async def list_users(
    session: DbSession,
    take: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    skip: int = Query(0, ge=0),
    is_owner: bool | None = None,
    email: str | None = None,
    role: str | None = None,
    fields: list[str] | None = Query(None, description="Columns to return, e.g. ?fields=email"),
):
    """List users. REST: GET /users?take=20&skip=0&is_owner=false&fields=email."""
    unknown = sorted(set(fields or ()) - _USER_COLUMNS)
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown user fields: {', '.join(unknown)}",
        )
    query_filter: dict[str, Any] = {}
    if is_owner is not None:
        query_filter["is_owner"] = is_owner
    if email is not None:
        query_filter["email"] = email
    if role is not None:
        query_filter["role"] = role
    options = ListQueryOptions(
        filter=query_filter or None,
        select={name: True for name in fields} if fields else None,
        take=take,
        skip=skip,
    )
    users = await UserRepository(session).find_many(options)
    return [_user_to_dict(u) for u in users]


@router.get("/roles")
async def count_users_by_role(session: DbSession) -> dict[str, int]:
    """User count per role, e.g. {"owner": 1, "admin": 2, "member": 6}."""
    return await UserRepository(session).count_users_by_role()
