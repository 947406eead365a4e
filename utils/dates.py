from calendar import monthrange
from datetime import date, datetime, timedelta

from models.budget import ANNUAL, MONTHLY
from models.obligation import Frequency
from services.errors import InvalidFrequency, InvalidPeriod

# months added per step for the plain calendar frequencies
MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.BIMONTHLY: 2,
    Frequency.QUARTERLY: 3,
    Frequency.SEMIANNUAL: 6,
    Frequency.ANNUAL: 12,
}

BUSINESS_DAY_TARGET = 5


def normalize_date(raw_date: str) -> date:
    """Parse ``MM/DD/YYYY`` or ISO ``YYYY-MM-DD`` text into a date."""
    raw_date = raw_date.strip()
    try:
        return date.fromisoformat(raw_date)
    except ValueError:
        return datetime.strptime(raw_date, "%m/%d/%Y").date()


def parse_frequency(tag) -> Frequency:
    if isinstance(tag, Frequency):
        return tag
    try:
        return Frequency(tag)
    except ValueError:
        raise InvalidFrequency(tag) from None


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months, clamping the day to the target month's end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def add_interval(value: date, frequency) -> date:
    frequency = parse_frequency(frequency)
    if frequency is Frequency.FIFTH_BUSINESS_DAY:
        raise InvalidFrequency(frequency.value)
    return add_months(value, MONTH_STEPS[frequency])


def fifth_business_day(value: date) -> date:
    """Return the 5th weekday (Mon-Fri) of the month after ``value``'s month.

    No holiday calendar is applied.
    """
    current = add_months(value.replace(day=1), 1)
    business_days = 0
    while True:
        if current.weekday() < 5:
            business_days += 1
            if business_days == BUSINESS_DAY_TARGET:
                return current
        current += timedelta(days=1)


# -----------------------------
# Period windows
# -----------------------------

def month_window(today: date):
    last_day = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def year_window(today: date):
    return date(today.year, 1, 1), date(today.year, 12, 31)


def period_window(period: str, today: date):
    """Inclusive (first_day, last_day) of the budget period containing ``today``."""
    if period == MONTHLY:
        return month_window(today)
    if period == ANNUAL:
        return year_window(today)
    raise InvalidPeriod(period)
