import datetime
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from repositories.categories_repository import get_categories
from services import transaction_service

router = APIRouter()


class CategoryCreate(BaseModel):
    name: str
    type: str


class TransactionCreate(BaseModel):
    type: str
    description: str
    category: str
    amount: Decimal
    date: datetime.date


# -------------------------
# READ TRANSACTIONS
# -------------------------

@router.get("/transactions")
def list_transactions(user_id: str = Query(...), limit: Optional[int] = Query(None)):
    transactions = transaction_service.get_all_transactions(user_id, limit=limit)
    return {"transactions": [t.to_dict() for t in transactions]}


# -------------------------
# MANUAL ENTRY
# -------------------------

@router.post("/transactions")
def add_transaction(body: TransactionCreate, user_id: str = Query(...)):
    transaction = transaction_service.add_transaction(
        owner=user_id,
        type=body.type,
        description=body.description,
        category=body.category,
        amount=body.amount,
        date=body.date,
    )
    return transaction.to_dict()


@router.delete("/transactions/{transaction_id}")
def delete_transaction(transaction_id: int, user_id: str = Query(...)):
    transaction_service.delete_transaction(user_id, transaction_id)
    return {"success": True}


# -------------------------
# CATEGORIES
# -------------------------

@router.get("/categories")
def list_categories(user_id: str = Query(...), type: Optional[str] = Query(None)):
    return {"categories": get_categories(owner=user_id, category_type=type)}


@router.post("/categories")
def create_category(body: CategoryCreate, user_id: str = Query(...)):
    return transaction_service.create_category(user_id, body.name, body.type)
