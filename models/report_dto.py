from dataclasses import dataclass
from decimal import Decimal
from typing import List


@dataclass
class CategoryShare:
    """Expense total of one category within a month."""
    category: str
    total: Decimal
    percent: Decimal  # share of the month's total expenses, 0-100


@dataclass
class MonthlySummary:
    year: int
    month: int
    income: Decimal
    expenses: Decimal
    balance: Decimal
    by_category: List[CategoryShare]

    def to_dict(self):
        return {
            "month": f"{self.year:04d}-{self.month:02d}",
            "income": str(self.income),
            "expenses": str(self.expenses),
            "balance": str(self.balance),
            "by_category": [
                {
                    "category": share.category,
                    "total": str(share.total),
                    "percent": float(share.percent),
                }
                for share in self.by_category
            ],
        }
