"""
Tests for date utilities
"""
from datetime import date, datetime

import pytest

from mycore.utils.dates import (
    calculate_completion,
    date_range,
    day_of_week,
    format_date,
    get_day_name,
    get_week_days,
    is_weekend,
    parse_date,
    round_half_up
)


def test_format_and_parse():
    assert format_date(date(2024, 6, 5)) == "2024-06-05"
    assert format_date(datetime(2024, 6, 5, 23, 59)) == "2024-06-05"
    assert parse_date("2024-06-05") == date(2024, 6, 5)
    assert parse_date(date(2024, 6, 5)) == date(2024, 6, 5)


def test_parse_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("06/05/2024")


def test_day_of_week_is_sunday_zero():
    assert day_of_week("2024-06-09") == 0  # Sunday
    assert day_of_week("2024-06-10") == 1  # Monday
    assert day_of_week("2024-06-08") == 6  # Saturday


def test_weekend_classification():
    assert is_weekend("2024-06-08")
    assert is_weekend("2024-06-09")
    assert not is_weekend("2024-06-07")
    assert not is_weekend("2024-06-10")


def test_day_names():
    assert get_day_name("2024-06-05") == "Wed"
    assert get_day_name(date(2024, 6, 9)) == "Sun"


def test_week_window_surrounds_anchor():
    days = get_week_days(date(2024, 6, 5))
    assert len(days) == 7
    assert days[0] == date(2024, 6, 2)
    assert days[3] == date(2024, 6, 5)
    assert days[-1] == date(2024, 6, 8)


def test_week_window_crosses_month():
    days = get_week_days(date(2024, 3, 1))
    assert days[0] == date(2024, 2, 27)
    assert days[-1] == date(2024, 3, 4)


def test_date_range_inclusive():
    assert date_range(date(2024, 6, 1), date(2024, 6, 3)) == [
        date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)
    ]


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


def test_calculate_completion():
    assert calculate_completion(0, 0) == 0
    assert calculate_completion(4, 3) == 75
    assert calculate_completion(8, 1) == 13
    assert calculate_completion(3, 3) == 100
