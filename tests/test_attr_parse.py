import datetime
import decimal
import pytest
from sqlalchemy import Column, Integer, Boolean, Date, DateTime, Numeric, String, JSON
from sarest.attr_parse import parse_attr


@pytest.mark.parametrize(
    "column_type, value, expected",
    [
        (Integer, "5", 5),
        (Integer, 5.0, 5),
        (Integer, None, None),
        (Boolean, "true", True),
        (Boolean, "0", False),
        (Boolean, False, False),
        (Date, "2020-01-31", datetime.date(2020, 1, 31)),
        (DateTime, "2020-01-31 10:20:30", datetime.datetime(2020, 1, 31, 10, 20, 30)),
        (Numeric, "1.10", decimal.Decimal("1.10")),
        (String, 42, "42"),
        (JSON, {"a": [1]}, {"a": [1]}),
    ],
)
def test_parse_attr(column_type, value, expected) -> None:
    assert parse_attr(Column(column_type), value) == expected


@pytest.mark.parametrize(
    "column_type, value",
    [
        (Integer, "abc"),
        (Integer, 1.5),
        (Integer, True),
        (Boolean, "maybe"),
        (Date, "31/01/2020"),
        (Numeric, "one"),
        (String, {"a": 1}),
    ],
)
def test_parse_attr_invalid(column_type, value) -> None:
    with pytest.raises(ValueError):
        parse_attr(Column(column_type), value)
