from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.timeclock.timeclock.common.datetime_utils import format_duration, format_elapsed
from src.timeclock.timeclock.common.validators import parse_rate, require_non_empty, require_positive_id
from src.timeclock.timeclock.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [("20", Decimal("20.00")), (19.99, Decimal("19.99")), (0, Decimal("0.00")), ("12.345", Decimal("12.35"))],
)
def test_parse_rate_accepts_non_negative_numbers(value, expected):
    assert parse_rate(value) == expected


@pytest.mark.parametrize("value", [None, "", "abc", "-0.01", "NaN", "Infinity", True])
def test_parse_rate_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        parse_rate(value)


def test_require_helpers():
    assert require_non_empty("  Sales ", "Name") == "Sales"
    assert require_positive_id("5", "Department") == 5
    with pytest.raises(ValidationError, match="Name is required"):
        require_non_empty(" ", "Name")
    with pytest.raises(ValidationError):
        require_positive_id(0, "Department")


def test_parse_rate_rejects_values_wider_than_the_column():
    assert parse_rate("99999999.99") == Decimal("99999999.99")
    with pytest.raises(ValidationError, match="cannot exceed"):
        parse_rate("123456789012")
    with pytest.raises(ValidationError):
        parse_rate("99999999.995")


def test_require_non_empty_max_length():
    assert require_non_empty("a" * 120, "Name", max_length=120) == "a" * 120
    with pytest.raises(ValidationError, match="at most 120 characters"):
        require_non_empty("a" * 121, "Name", max_length=120)


def test_format_elapsed_is_clamped():
    start = datetime(2024, 1, 1, 9, 0, 0)
    assert format_elapsed(start, start + timedelta(hours=26, seconds=5)) == "26:00:05"
    assert format_elapsed(start, start - timedelta(minutes=1)) == "00:00:00"


def test_format_duration():
    assert format_duration(timedelta(minutes=45)) == "45m"
    assert format_duration(timedelta(seconds=59)) == "0m"
