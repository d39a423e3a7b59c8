"""
Predicate builder tests - criteria mapping to SQL expressions.
"""

import pytest

from accounts.db.models import User
from accounts.db.predicates import Equals, In, IsNull, Not, Predicate, build_where, to_clause


def _sql(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


def test_in_drops_duplicates_and_keeps_first_order():
    assert In(["b", "a", "b"]).values == ("b", "a")
    assert In(["a", "b"]) == In(["a", "b", "a"])


def test_in_accepts_any_iterable():
    assert In(x for x in ("a", "b")).values == ("a", "b")
    assert In(set()).values == ()


def test_plain_value_means_equality():
    assert _sql(to_clause(User.role, "owner")) == _sql(Equals("owner").to_clause(User.role))
    assert _sql(to_clause(User.role, "owner")) == "users.role = 'owner'"


def test_equals_none_is_null_check():
    assert _sql(Equals(None).to_clause(User.password)) == "users.password IS NULL"


def test_is_null():
    assert _sql(to_clause(User.password, IsNull())) == "users.password IS NULL"


def test_not_is_null():
    assert _sql(to_clause(User.password, Not(IsNull()))) == "users.password IS NOT NULL"


def test_not_plain_value():
    assert _sql(to_clause(User.role, Not("owner"))) == "users.role != 'owner'"


def test_build_where_one_clause_per_field():
    clauses = build_where(User, {"email": "a@x.com", "password": Not(IsNull())})
    assert [_sql(c) for c in clauses] == [
        "users.email = 'a@x.com'",
        "users.password IS NOT NULL",
    ]


@pytest.mark.parametrize("criteria", [None, {}])
def test_build_where_empty(criteria):
    assert build_where(User, criteria) == []


def test_build_where_unknown_field():
    with pytest.raises(AttributeError):
        build_where(User, {"is_owner": True})


def test_base_predicate_is_abstract():
    with pytest.raises(TypeError):
        Predicate()


def test_predicate_subclass_must_translate():
    class Incomplete(Predicate):
        pass

    with pytest.raises(TypeError):
        Incomplete()
