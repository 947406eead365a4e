from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from routes.common import resolve_today
from services import obligation_service
from services.obligation_payment_service import mark_obligation_paid

router = APIRouter(prefix="/obligations", tags=["obligations"])


class ObligationCreate(BaseModel):
    description: str
    category: str
    amount: Decimal
    frequency: str
    start_date: date


class ObligationUpdate(BaseModel):
    description: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = None
    frequency: Optional[str] = None
    next_due_date: Optional[date] = None


@router.post("")
def create_obligation(
    body: ObligationCreate,
    user_id: str = Query(...),
    as_of_date: Optional[str] = Query(None),
):
    obligation = obligation_service.create_obligation(
        owner=user_id,
        description=body.description,
        category=body.category,
        amount=body.amount,
        frequency=body.frequency,
        start_date=body.start_date,
        today=resolve_today(as_of_date),
    )
    return obligation.to_dict()


@router.get("")
def list_obligations(user_id: str = Query(...)):
    obligations = obligation_service.list_obligations(user_id)
    return {
        "count": len(obligations),
        "obligations": [o.to_dict() for o in obligations],
    }


@router.get("/alerts")
def due_alerts(user_id: str = Query(...), as_of_date: Optional[str] = Query(None)):
    """Overdue and due-within-7-days obligations, most urgent first."""
    alerts = obligation_service.get_due_alerts(user_id, resolve_today(as_of_date))
    return {
        "alerts": [
            {
                **obligation.to_dict(),
                "status": status.bucket.value,
                "days_until_due": status.days_until_due,
            }
            for obligation, status in alerts
        ]
    }


@router.get("/{obligation_id}")
def get_obligation(obligation_id: int, user_id: str = Query(...)):
    return obligation_service.get_obligation(user_id, obligation_id).to_dict()


@router.patch("/{obligation_id}")
def update_obligation(obligation_id: int, body: ObligationUpdate, user_id: str = Query(...)):
    fields = {k: v for k, v in body.dict(exclude_unset=True).items() if v is not None}
    obligation = obligation_service.update_obligation(user_id, obligation_id, **fields)
    return obligation.to_dict()


@router.post("/{obligation_id}/pay")
def pay_obligation(
    obligation_id: int,
    user_id: str = Query(...),
    as_of_date: Optional[str] = Query(None),
):
    """Post the payment to the ledger and advance the obligation's due date."""
    result = mark_obligation_paid(user_id, obligation_id, resolve_today(as_of_date))
    return result.to_dict()


@router.post("/{obligation_id}/deactivate")
def deactivate_obligation(obligation_id: int, user_id: str = Query(...)):
    obligation_service.deactivate_obligation(user_id, obligation_id)
    return {"success": True}


@router.delete("/{obligation_id}")
def delete_obligation(obligation_id: int, user_id: str = Query(...)):
    obligation_service.delete_obligation(user_id, obligation_id)
    return {"success": True}
