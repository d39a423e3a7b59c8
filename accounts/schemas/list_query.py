"""List request/options schemas - what callers ask for and what the store runs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ListQueryOptions(BaseModel):
    """Generic list request: filter, projection and paging."""

    filter: dict[str, Any] | None = None
    select: dict[str, bool] | None = None
    take: int | None = Field(default=None, ge=0)
    skip: int | None = Field(default=None, ge=0)


class FindManyOptions(BaseModel):
    """Shaped options for EntityStore.find_many. Unset fields stay None."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    where: dict[str, Any] | None = None
    select: dict[str, bool] | None = None
    relations: list[str] | None = None
    take: int | None = None
    skip: int | None = None
