from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


@dataclass
class LedgerTransaction:
    """A posted income or expense entry."""
    id: Optional[int]
    owner: str
    type: str  # 'income' | 'expense'
    description: str
    category: str
    amount: Decimal
    date: date
    created_at: Optional[datetime] = None

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "type": self.type,
            "description": self.description,
            "category": self.category,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
