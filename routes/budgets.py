from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from routes.common import resolve_today
from services import budget_service

router = APIRouter(prefix="/budgets", tags=["budgets"])


class BudgetCreate(BaseModel):
    category: str
    limit: Decimal
    period: str = "monthly"


@router.post("")
def create_budget(body: BudgetCreate, user_id: str = Query(...)):
    budget = budget_service.create_budget(user_id, body.category, body.limit, body.period)
    return budget.to_dict()


@router.get("")
def list_budgets(user_id: str = Query(...)):
    return {"budgets": [b.to_dict() for b in budget_service.list_budgets(user_id)]}


@router.get("/status")
def budget_statuses(user_id: str = Query(...), as_of_date: Optional[str] = Query(None)):
    """Spend, percentage used and over-budget flag for every budget."""
    statuses = budget_service.get_budget_statuses(user_id, resolve_today(as_of_date))
    return {"budgets": [s.to_dict() for s in statuses]}


@router.delete("/{budget_id}")
def delete_budget(budget_id: int, user_id: str = Query(...)):
    budget_service.delete_budget(user_id, budget_id)
    return {"success": True}
