from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import RedirectResponse

from routes.common import resolve_today
from services.budget_service import get_budget_statuses
from services.goal_service import is_complete, list_goals, progress
from services.obligation_service import get_due_alerts
from services.report_service import get_monthly_report

router = APIRouter()


@router.get("/")
def root():
    return RedirectResponse(url="/docs")


@router.get("/dashboard")
def dashboard(user_id: str = Query(...), as_of_date: Optional[str] = Query(None)):
    today = resolve_today(as_of_date)

    # --- Current month summary ---
    summary = get_monthly_report(user_id, today.year, today.month)

    # --- Due alerts ---
    alerts = [
        {
            "id": obligation.id,
            "description": obligation.description,
            "amount": str(obligation.amount),
            "due_date": obligation.next_due_date.isoformat(),
            "status": status.bucket.value,
            "days_until_due": status.days_until_due,
        }
        for obligation, status in get_due_alerts(user_id, today)
    ]

    # --- Budgets and goals ---
    budgets = [s.to_dict() for s in get_budget_statuses(user_id, today)]
    goals = [
        {**g.to_dict(), "progress": float(progress(g)), "complete": is_complete(g)}
        for g in list_goals(user_id)
    ]

    return {
        "as_of_date": today.isoformat(),
        "summary": summary.to_dict(),
        "due_alerts": alerts,
        "budgets": budgets,
        "goals": goals,
    }
