from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Goal:
    id: Optional[int]
    owner: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0.00")
    deadline: Optional[date] = None  # descriptive only, never enforced
    category: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "target_amount": str(self.target_amount),
            "current_amount": str(self.current_amount),
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "category": self.category,
        }
