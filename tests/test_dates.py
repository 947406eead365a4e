from datetime import date

import pytest

from models.obligation import Frequency
from services.errors import InvalidFrequency, InvalidPeriod
from utils.dates import (
    add_interval,
    add_months,
    fifth_business_day,
    month_window,
    normalize_date,
    parse_frequency,
    period_window,
    year_window,
)


@pytest.mark.parametrize("frequency, expected", [
    ("monthly", date(2024, 4, 10)),
    ("bimonthly", date(2024, 5, 10)),
    ("quarterly", date(2024, 6, 10)),
    ("semiannual", date(2024, 9, 10)),
    ("annual", date(2025, 3, 10)),
])
def test_add_interval_per_frequency(frequency, expected):
    assert add_interval(date(2024, 3, 10), frequency) == expected


def test_add_interval_crosses_year_boundary():
    assert add_interval(date(2024, 11, 15), Frequency.QUARTERLY) == date(2025, 2, 15)
    assert add_interval(date(2024, 12, 1), Frequency.MONTHLY) == date(2025, 1, 1)


def test_month_end_overflow_clamps_to_last_day():
    assert add_interval(date(2024, 1, 31), "monthly") == date(2024, 2, 29)
    assert add_interval(date(2023, 1, 31), "monthly") == date(2023, 2, 28)
    assert add_interval(date(2024, 8, 31), "semiannual") == date(2025, 2, 28)
    assert add_interval(date(2024, 2, 29), "annual") == date(2025, 2, 28)


def test_repeated_month_end_steps_drift():
    # the clamp sticks: once moved to the 29th the day never returns to 31
    due = date(2024, 1, 31)
    due = add_interval(due, "monthly")
    due = add_interval(due, "monthly")
    assert due == date(2024, 3, 29)


def test_add_months_negative_offset():
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_fifth_business_day_of_following_month():
    # Feb 2024: Thu 1, Fri 2, Mon 5, Tue 6, Wed 7
    assert fifth_business_day(date(2024, 1, 15)) == date(2024, 2, 7)


def test_fifth_business_day_month_starting_on_saturday():
    # June 2024 starts on a Saturday
    assert fifth_business_day(date(2024, 5, 31)) == date(2024, 6, 7)


def test_fifth_business_day_december_rolls_into_next_year():
    assert fifth_business_day(date(2024, 12, 10)) == date(2025, 1, 7)


def test_fifth_business_day_ignores_day_of_input():
    assert fifth_business_day(date(2024, 1, 1)) == fifth_business_day(date(2024, 1, 31))


def test_unknown_frequency_is_rejected():
    with pytest.raises(InvalidFrequency):
        parse_frequency("mensal")
    with pytest.raises(InvalidFrequency):
        add_interval(date(2024, 1, 1), "weekly")


def test_add_interval_rejects_fifth_business_day():
    with pytest.raises(InvalidFrequency):
        add_interval(date(2024, 1, 1), Frequency.FIFTH_BUSINESS_DAY)


def test_period_windows():
    today = date(2024, 2, 14)
    assert month_window(today) == (date(2024, 2, 1), date(2024, 2, 29))
    assert year_window(today) == (date(2024, 1, 1), date(2024, 12, 31))
    assert period_window("monthly", today) == month_window(today)
    assert period_window("annual", today) == year_window(today)
    with pytest.raises(InvalidPeriod):
        period_window("weekly", today)


def test_normalize_date_accepts_iso_and_us_formats():
    assert normalize_date("2024-03-05") == date(2024, 3, 5)
    assert normalize_date(" 03/05/2024 ") == date(2024, 3, 5)
