from datetime import date
from decimal import Decimal

import duckdb
import pytest

from db import get_db
from models.budget import Budget
from models.transaction import LedgerTransaction
from repositories import budgets_repository, transactions_repository
from repositories.categories_repository import add_category, display_name_to_ids
from services import budget_service
from services.errors import InvalidPeriod, ValidationError, WriteFailed

TODAY = date(2024, 5, 20)


def _tx(amount, on, category="moradia", type="expense", owner="ana"):
    return LedgerTransaction(
        id=None,
        owner=owner,
        type=type,
        description="lançamento",
        category=category,
        amount=Decimal(str(amount)),
        date=on,
    )


def test_monthly_spend_only_counts_current_month():
    transactions = [
        _tx(500, date(2024, 5, 1)),
        _tx(300, date(2024, 5, 31)),
        _tx(100, date(2024, 4, 30)),
    ]
    assert budget_service.spend_for(["moradia"], "monthly", transactions, TODAY) == Decimal("800")


def test_spend_ignores_income_and_other_categories():
    transactions = [
        _tx(500, date(2024, 5, 2)),
        _tx(900, date(2024, 5, 2), type="income"),
        _tx(70, date(2024, 5, 3), category="lazer"),
        _tx(25, date(2024, 5, 4), category="MORADIA"),
    ]
    assert budget_service.spend_for(["moradia"], "monthly", transactions, TODAY) == Decimal("525")


def test_annual_spend_covers_calendar_year():
    transactions = [
        _tx(100, date(2024, 1, 1)),
        _tx(200, date(2024, 12, 31)),
        _tx(400, date(2023, 12, 31)),
    ]
    assert budget_service.spend_for(["moradia"], "annual", transactions, TODAY) == Decimal("300")


def test_spend_with_multiple_category_ids():
    transactions = [_tx(10, date(2024, 5, 5)), _tx(15, date(2024, 5, 6), category="moradia-ana")]
    assert budget_service.spend_for(["moradia", "moradia-ana"], "monthly", transactions, TODAY) == Decimal("25")


def test_spend_rejects_unknown_period():
    with pytest.raises(InvalidPeriod):
        budget_service.spend_for(["moradia"], "weekly", [], TODAY)


def test_budget_status_caps_percentage():
    budget = Budget(id=1, owner="ana", category="Moradia", limit=Decimal("1000"), period="monthly")

    under = budget_service.budget_status(budget, Decimal("800"))
    assert under.pct == Decimal("0.8")
    assert not under.over_budget
    assert under.remaining == Decimal("200")

    over = budget_service.budget_status(budget, Decimal("1200"))
    assert over.pct == Decimal("1")
    assert over.over_budget
    assert over.remaining == Decimal("-200")


def test_resolver_maps_shared_display_name_to_all_ids(temp_db):
    conn = get_db()
    try:
        add_category(conn, "moradia-ana", "ana", "Moradia", "expense")
        add_category(conn, "moradia-bruno", "bruno", "Moradia", "expense")

        assert display_name_to_ids(conn, "ana", "moradia") == ["moradia", "moradia-ana"]
        assert display_name_to_ids(conn, "carla", "Moradia") == ["moradia"]
        assert display_name_to_ids(conn, "ana", "Inexistente") == []
    finally:
        conn.close()


def test_budget_statuses_from_store(temp_db):
    conn = get_db()
    try:
        add_category(conn, "moradia-ana", "ana", "Moradia", "expense")
        for tx in [
            _tx(500, date(2024, 5, 3)),
            _tx(300, date(2024, 5, 10), category="moradia-ana"),
            _tx(100, date(2024, 4, 10)),
            _tx(999, date(2024, 5, 10), owner="bruno"),
        ]:
            transactions_repository.insert_transaction(conn, tx)
    finally:
        conn.close()

    budget_service.create_budget("ana", "Moradia", "1000", "monthly")
    budget_service.create_budget("ana", "Moradia", "850", "annual")

    statuses = {s.budget.period: s for s in budget_service.get_budget_statuses("ana", TODAY)}

    assert statuses["monthly"].spent == Decimal("800")
    assert not statuses["monthly"].over_budget
    assert statuses["annual"].spent == Decimal("900")
    assert statuses["annual"].over_budget
    assert statuses["annual"].pct == Decimal("1")


def test_create_budget_validation(temp_db):
    with pytest.raises(InvalidPeriod):
        budget_service.create_budget("ana", "Moradia", 100, "weekly")
    with pytest.raises(ValidationError):
        budget_service.create_budget("ana", "Moradia", 0, "monthly")
    with pytest.raises(ValidationError):
        budget_service.create_budget("ana", " ", 100, "monthly")


def test_budget_limit_beyond_column_range_is_rejected(temp_db):
    with pytest.raises(ValidationError):
        budget_service.create_budget("ana", "Moradia", "10000000000", "monthly")
    assert budget_service.list_budgets("ana") == []


def test_store_error_on_budget_create_becomes_write_failed(temp_db, monkeypatch):
    def failing_insert(conn, budget):
        raise duckdb.Error("disk full")

    monkeypatch.setattr(budgets_repository, "insert_budget", failing_insert)
    with pytest.raises(WriteFailed):
        budget_service.create_budget("ana", "Moradia", "1000", "monthly")
