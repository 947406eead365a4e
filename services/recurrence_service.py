"""
Recurrence Service — due date advancement and due-status classification.

Pure functions over naive calendar dates. "Today" is always passed in;
nothing here reads the clock.
"""
from datetime import date

from models.obligation import DueBucket, DueStatus, Frequency
from utils.dates import add_interval, fifth_business_day, parse_frequency

DUE_SOON_DAYS = 7


def next_occurrence(due: date, frequency) -> date:
    """Single step from ``due`` to the following occurrence."""
    frequency = parse_frequency(frequency)
    if frequency is Frequency.FIFTH_BUSINESS_DAY:
        return fifth_business_day(due)
    return add_interval(due, frequency)


def advance_until_future(current_due: date, frequency, today: date) -> date:
    """
    Step ``current_due`` forward until it is strictly after ``today``.

    A due date equal to ``today`` is pushed to the next occurrence. A due
    date already in the future comes back unchanged.
    """
    frequency = parse_frequency(frequency)
    next_due = current_due
    while next_due <= today:
        next_due = next_occurrence(next_due, frequency)
    return next_due


def first_due_date(start_date: date, frequency, today: date) -> date:
    """Creation-time due date: skip occurrences between ``start_date`` and today."""
    return advance_until_future(start_date, frequency, today)


def due_date_after_payment(paid_due: date, frequency, today: date) -> date:
    """Due date following a payment recorded on ``paid_due``.

    Always at least one occurrence past ``paid_due``, and strictly after
    ``today``.
    """
    return advance_until_future(paid_due, frequency, max(today, paid_due))


def classify_due_status(due_date: date, today: date) -> DueStatus:
    days_until_due = (due_date - today).days

    if days_until_due < 0:
        bucket = DueBucket.OVERDUE
    elif days_until_due <= DUE_SOON_DAYS:
        bucket = DueBucket.DUE_SOON
    else:
        bucket = DueBucket.SCHEDULED

    return DueStatus(bucket=bucket, days_until_due=days_until_due)


def collect_due_alerts(obligations, today: date):
    """
    Overdue and due-soon obligations with their status, most urgent first.

    Inactive obligations are skipped.
    """
    alerts = []
    for obligation in obligations:
        if not obligation.active:
            continue
        status = classify_due_status(obligation.next_due_date, today)
        if status.bucket is not DueBucket.SCHEDULED:
            alerts.append((obligation, status))

    return sorted(alerts, key=lambda pair: (pair[1].days_until_due, pair[0].id or 0))
