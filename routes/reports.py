from typing import Optional

from fastapi import APIRouter, Query

from routes.common import resolve_today
from services.report_service import get_monthly_report

router = APIRouter()


@router.get("/reports/monthly")
def monthly_report(
    user_id: str = Query(...),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    """
    Income, expenses, balance and expense share per category for one month.

    Query Parameters:
        year, month (optional): Month to report. Default to the month of
                                ``as_of_date`` (or today).
    """
    today = resolve_today(as_of_date)
    report = get_monthly_report(user_id, year or today.year, month or today.month)
    return report.to_dict()
