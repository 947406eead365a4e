from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from services import goal_service

router = APIRouter(prefix="/goals", tags=["goals"])


class GoalCreate(BaseModel):
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None
    category: Optional[str] = None


class Contribution(BaseModel):
    amount: Decimal


def _goal_payload(goal):
    return {
        **goal.to_dict(),
        "progress": float(goal_service.progress(goal)),
        "complete": goal_service.is_complete(goal),
    }


@router.post("")
def create_goal(body: GoalCreate, user_id: str = Query(...)):
    goal = goal_service.create_goal(
        user_id,
        body.name,
        body.target_amount,
        current_amount=body.current_amount,
        deadline=body.deadline,
        category=body.category,
    )
    return _goal_payload(goal)


@router.get("")
def list_goals(user_id: str = Query(...)):
    return {"goals": [_goal_payload(g) for g in goal_service.list_goals(user_id)]}


@router.post("/{goal_id}/contributions")
def add_contribution(goal_id: int, body: Contribution, user_id: str = Query(...)):
    goal = goal_service.add_contribution(user_id, goal_id, body.amount)
    return _goal_payload(goal)


@router.delete("/{goal_id}")
def delete_goal(goal_id: int, user_id: str = Query(...)):
    goal_service.delete_goal(user_id, goal_id)
    return {"success": True}
