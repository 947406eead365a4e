import logging
import re
from datetime import date

from db import get_db
from models.obligation import RecurringObligation
from models.transaction import EXPENSE
from repositories import obligations_repository
from repositories.categories_repository import is_valid_category
from services.errors import NotFound, ValidationError, WriteFailed
from services.recurrence_service import collect_due_alerts, first_due_date
from utils.dates import parse_frequency
from utils.money import to_money

MAX_DESCRIPTION_LENGTH = 100
MAX_AMOUNT = 1_000_000

_UNSAFE_CHARS = re.compile(r"[\x00-\x1f\x7f<>]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_description(raw: str) -> str:
    """Strip markup brackets and control characters, collapse whitespace."""
    if raw is None:
        raise ValidationError("Description is required")
    cleaned = _WHITESPACE.sub(" ", _UNSAFE_CHARS.sub(" ", raw)).strip()
    if not cleaned:
        raise ValidationError("Description is required")
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return cleaned


def validate_amount(raw):
    try:
        amount = to_money(raw)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT:,}")
    return amount


def _require_expense_category(conn, owner, category):
    if not category or not is_valid_category(conn, owner, category, EXPENSE):
        raise ValidationError(f"Unknown expense category: {category!r}")


def _get_owned(conn, owner, obligation_id):
    obligation = obligations_repository.get_obligation(conn, obligation_id)
    if obligation is None or obligation.owner != owner:
        raise NotFound(f"Obligation {obligation_id} not found")
    return obligation


def create_obligation(*, owner, description, category, amount, frequency,
                      start_date: date, today: date) -> RecurringObligation:
    """Validate and store a new obligation.

    ``next_due_date`` is ``start_date`` advanced past ``today``, so an
    obligation started in the past never begins overdue.
    """
    frequency = parse_frequency(frequency)
    obligation = RecurringObligation(
        id=None,
        owner=owner,
        description=sanitize_description(description),
        category=category,
        amount=validate_amount(amount),
        frequency=frequency,
        next_due_date=first_due_date(start_date, frequency, today),
        active=True,
    )

    conn = get_db()
    try:
        _require_expense_category(conn, owner, category)
        obligation.id = obligations_repository.insert_obligation(conn, obligation)
    finally:
        conn.close()

    logging.info(
        f"Obligation {obligation.id} created for {owner} "
        f"({frequency.value}, next due {obligation.next_due_date})"
    )
    return obligation


def list_obligations(owner):
    conn = get_db()
    try:
        return obligations_repository.list_active(conn, owner)
    finally:
        conn.close()


def get_obligation(owner, obligation_id):
    """Active obligation owned by ``owner``; deactivated ones read as NotFound."""
    conn = get_db()
    try:
        obligation = _get_owned(conn, owner, obligation_id)
    finally:
        conn.close()
    if not obligation.active:
        raise NotFound(f"Obligation {obligation_id} not found")
    return obligation


def update_obligation(owner, obligation_id, **fields):
    """Owner edit. ``next_due_date`` may be overridden to any date."""
    updates = {}
    if "description" in fields:
        updates["description"] = sanitize_description(fields["description"])
    if "amount" in fields:
        updates["amount"] = validate_amount(fields["amount"])
    if "frequency" in fields:
        updates["frequency"] = parse_frequency(fields["frequency"])
    if "next_due_date" in fields:
        updates["next_due_date"] = fields["next_due_date"]
    if "category" in fields:
        updates["category"] = fields["category"]

    conn = get_db()
    try:
        _get_owned(conn, owner, obligation_id)
        if "category" in updates:
            _require_expense_category(conn, owner, updates["category"])
        if not obligations_repository.update_obligation(conn, obligation_id, updates):
            raise WriteFailed(f"Obligation {obligation_id} could not be updated")
        return obligations_repository.get_obligation(conn, obligation_id)
    finally:
        conn.close()


def deactivate_obligation(owner, obligation_id):
    conn = get_db()
    try:
        _get_owned(conn, owner, obligation_id)
        obligations_repository.update_obligation(conn, obligation_id, {"active": False})
    finally:
        conn.close()
    logging.info(f"Obligation {obligation_id} deactivated by {owner}")


def delete_obligation(owner, obligation_id):
    conn = get_db()
    try:
        _get_owned(conn, owner, obligation_id)
        obligations_repository.delete_obligation(conn, obligation_id)
    finally:
        conn.close()
    logging.info(f"Obligation {obligation_id} deleted by {owner}")


def get_due_alerts(owner, today: date):
    """Overdue and due-soon active obligations for ``owner``."""
    return collect_due_alerts(list_obligations(owner), today)
