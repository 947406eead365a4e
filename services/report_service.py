"""Monthly income/expense summary with a per-category expense breakdown."""
from calendar import monthrange
from datetime import date
from decimal import Decimal

from db import get_db
from models.report_dto import CategoryShare, MonthlySummary
from models.transaction import EXPENSE, INCOME
from repositories.transactions_repository import get_all_transactions
from services.errors import ValidationError


def monthly_summary(transactions, year: int, month: int) -> MonthlySummary:
    income = Decimal("0.00")
    expenses = Decimal("0.00")
    per_category = {}

    for tx in transactions:
        if (tx.date.year, tx.date.month) != (year, month):
            continue
        if tx.type == INCOME:
            income += tx.amount
        elif tx.type == EXPENSE:
            expenses += tx.amount
            per_category[tx.category] = per_category.get(tx.category, Decimal("0.00")) + tx.amount

    shares = [
        CategoryShare(
            category=category,
            total=total,
            percent=(total / expenses * 100).quantize(Decimal("0.1")) if expenses else Decimal("0.0"),
        )
        for category, total in per_category.items()
    ]
    shares.sort(key=lambda s: (-s.total, s.category))

    return MonthlySummary(
        year=year,
        month=month,
        income=income,
        expenses=expenses,
        balance=income - expenses,
        by_category=shares,
    )


def get_monthly_report(owner, year: int, month: int) -> MonthlySummary:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")

    start = date(year, month, 1)
    end = date(year, month, monthrange(year, month)[1])
    conn = get_db()
    try:
        transactions = get_all_transactions(conn, owner, start_date=start, end_date=end)
    finally:
        conn.close()
    return monthly_summary(transactions, year, month)
