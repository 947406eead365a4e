import logging
from datetime import date
from decimal import Decimal

import duckdb

from db import get_db
from models.budget import BUDGET_PERIODS, Budget, BudgetStatus
from models.transaction import EXPENSE
from repositories import budgets_repository, transactions_repository
from repositories.categories_repository import display_name_to_ids
from services.errors import InvalidPeriod, NotFound, ValidationError, WriteFailed
from utils.dates import period_window
from utils.money import MAX_STORED_AMOUNT, to_money


def spend_for(category_ids, period, transactions, today: date) -> Decimal:
    """
    Sum expense amounts for ``category_ids`` inside the period window.

    Args:
        category_ids: Category ids already resolved from the budget's display name.
        period: 'monthly' (calendar month of ``today``) or 'annual' (calendar year).
        transactions: Iterable of LedgerTransaction.
        today: Reference date for the period window.

    Returns:
        Raw sum as Decimal; percentages and over-budget flags are the caller's job.
    """
    start, end = period_window(period, today)
    wanted = {c.lower() for c in category_ids}

    total = Decimal("0.00")
    for tx in transactions:
        if tx.type != EXPENSE:
            continue
        if tx.category.lower() not in wanted:
            continue
        if start <= tx.date <= end:
            total += tx.amount
    return total


def budget_status(budget: Budget, spent: Decimal) -> BudgetStatus:
    pct = min(spent / budget.limit, Decimal("1")) if budget.limit else Decimal("1")
    return BudgetStatus(
        budget=budget,
        spent=spent,
        pct=pct,
        over_budget=spent > budget.limit,
        remaining=budget.limit - spent,
    )


def create_budget(owner, category, limit, period) -> Budget:
    if period not in BUDGET_PERIODS:
        raise InvalidPeriod(period)
    if not category or not category.strip():
        raise ValidationError("Budget category is required")
    try:
        limit = to_money(limit)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if limit <= 0:
        raise ValidationError("Budget limit must be greater than zero")
    if limit > MAX_STORED_AMOUNT:
        raise ValidationError(f"Budget limit must not exceed {MAX_STORED_AMOUNT:,}")

    budget = Budget(id=None, owner=owner, category=category.strip(), limit=limit, period=period)
    conn = get_db()
    try:
        budget.id = budgets_repository.insert_budget(conn, budget)
    except duckdb.Error as e:
        logging.error(f"Budget insert failed for {owner}: {e}")
        raise WriteFailed(f"Budget {budget.category!r} could not be saved") from e
    finally:
        conn.close()

    logging.info(f"Budget {budget.id} created for {owner}: {budget.category} {limit} {period}")
    return budget


def list_budgets(owner):
    conn = get_db()
    try:
        return budgets_repository.list_budgets(conn, owner)
    finally:
        conn.close()


def delete_budget(owner, budget_id):
    conn = get_db()
    try:
        budget = budgets_repository.get_budget(conn, budget_id)
        if budget is None or budget.owner != owner:
            raise NotFound(f"Budget {budget_id} not found")
        budgets_repository.delete_budget(conn, budget_id)
    finally:
        conn.close()


def get_budget_statuses(owner, today: date):
    """Spend against every budget of ``owner`` for the period containing ``today``."""
    conn = get_db()
    try:
        statuses = []
        for budget in budgets_repository.list_budgets(conn, owner):
            category_ids = display_name_to_ids(conn, owner, budget.category)
            start, end = period_window(budget.period, today)
            spent = transactions_repository.sum_by_category_and_date_range(
                conn, owner, category_ids, start, end
            )
            statuses.append(budget_status(budget, spent))
        return statuses
    finally:
        conn.close()
