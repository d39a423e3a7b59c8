"""
Predicate builder - field constraints composed into a criteria mapping.
Challenge: Let repositories describe filters as data (field -> predicate) and translate
them to SQLAlchemy expressions in one place.

A criteria mapping looks like ``{"id": In(ids), "password": Not(IsNull())}``. Plain
values mean equality, fields are combined with AND.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, not_


class Predicate(ABC):
    """Base class for field predicates."""

    @abstractmethod
    def to_clause(self, column) -> ColumnElement[bool]:
        ...


@dataclass(frozen=True)
class Equals(Predicate):
    value: Any

    def to_clause(self, column) -> ColumnElement[bool]:
        if self.value is None:
            return column.is_(None)
        return column == self.value


@dataclass(frozen=True, init=False)
class In(Predicate):
    """Set membership. Duplicates are dropped; an empty set matches nothing."""

    values: tuple

    def __init__(self, values: Iterable[Any]):
        object.__setattr__(self, "values", tuple(dict.fromkeys(values)))

    def to_clause(self, column) -> ColumnElement[bool]:
        return column.in_(self.values)


@dataclass(frozen=True)
class IsNull(Predicate):
    def to_clause(self, column) -> ColumnElement[bool]:
        return column.is_(None)


@dataclass(frozen=True)
class Not(Predicate):
    """Negates a predicate. A plain value is negated equality: ``Not("owner")``."""

    inner: Any

    def to_clause(self, column) -> ColumnElement[bool]:
        return not_(to_clause(column, self.inner))


def to_clause(column, predicate: Any) -> ColumnElement[bool]:
    """Translate one predicate (or plain value) into a column expression."""
    if not isinstance(predicate, Predicate):
        predicate = Equals(predicate)
    return predicate.to_clause(column)


def build_where(model: type, criteria: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
    """Translate a criteria mapping into clauses on ``model``'s mapped attributes."""
    if not criteria:
        return []
    return [to_clause(getattr(model, field), predicate) for field, predicate in criteria.items()]
