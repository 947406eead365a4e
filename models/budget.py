from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

MONTHLY = "monthly"
ANNUAL = "annual"
BUDGET_PERIODS = (MONTHLY, ANNUAL)


@dataclass
class Budget:
    id: Optional[int]
    owner: str
    category: str  # display name, resolved to category ids on read
    limit: Decimal
    period: str  # 'monthly' | 'annual'

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "category": self.category,
            "limit": str(self.limit),
            "period": self.period,
        }


@dataclass
class BudgetStatus:
    """Spend against a budget for its current period window."""
    budget: Budget
    spent: Decimal
    pct: Decimal
    over_budget: bool
    remaining: Decimal

    def to_dict(self):
        return {
            **self.budget.to_dict(),
            "spent": str(self.spent),
            "pct": float(self.pct),
            "over_budget": self.over_budget,
            "remaining": str(self.remaining),
        }
