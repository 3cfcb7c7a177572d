import datetime
import pytest
from sarest.criteria import compile_criteria
from sarest.errors import QuerySpecError
from sarest.fields import SQLAlchemySchema
from sarest.sarest_types import QuerySpec, SortKey, SearchClause
from models import User, Thing


def test_compile_defaults() -> None:
    criteria = compile_criteria(QuerySpec(), SQLAlchemySchema(User))
    assert criteria.equals == ()
    assert criteria.search is None
    assert criteria.order == (SortKey("id"),)
    assert (criteria.offset, criteria.limit) == (0, None)


def test_compile_search_uses_text_attributes() -> None:
    criteria = compile_criteria(QuerySpec(generic_search="gm"), SQLAlchemySchema(User))
    assert criteria.search == SearchClause("gm", ("username", "email"))

    criteria = compile_criteria(QuerySpec(generic_search="x"), SQLAlchemySchema(Thing))
    assert criteria.search.fields == ("code", "label")


def test_compile_order_appends_primary_key() -> None:
    spec = QuerySpec(sort_keys=(SortKey("username", True),))
    assert compile_criteria(spec, SQLAlchemySchema(User)).order == (SortKey("username", True), SortKey("id"))

    spec = QuerySpec(sort_keys=(SortKey("id", True), SortKey("username")))
    assert compile_criteria(spec, SQLAlchemySchema(User)).order == spec.sort_keys


def test_compile_filter_values_are_coerced() -> None:
    spec = QuerySpec(
        equality_filters={"amount": ("1", "2"), "active": ("false",), "created": ("2020-01-31",)},
        offset=3,
        count=4,
    )
    criteria = compile_criteria(spec, SQLAlchemySchema(Thing))
    assert criteria.equals == (("amount", (1, 2)), ("active", (False,)), ("created", (datetime.date(2020, 1, 31),)))
    assert (criteria.offset, criteria.limit) == (3, 4)


@pytest.mark.parametrize("attr_name, value", [("amount", "abc"), ("active", "maybe"), ("created", "yesterday")])
def test_compile_invalid_filter_value(attr_name: str, value: str) -> None:
    with pytest.raises(QuerySpecError):
        compile_criteria(QuerySpec(equality_filters={attr_name: (value,)}), SQLAlchemySchema(Thing))
