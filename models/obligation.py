from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Frequency(str, Enum):
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"
    FIFTH_BUSINESS_DAY = "fifth-business-day"


class DueBucket(str, Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"


@dataclass
class RecurringObligation:
    """A recurring expense commitment and its next scheduled payment."""
    id: Optional[int]
    owner: str
    description: str
    category: str
    amount: Decimal
    frequency: Frequency
    next_due_date: date
    active: bool = True

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "description": self.description,
            "category": self.category,
            "amount": str(self.amount),
            "frequency": self.frequency.value,
            "next_due_date": self.next_due_date.isoformat(),
            "active": self.active,
        }


@dataclass(frozen=True)
class DueStatus:
    bucket: DueBucket
    days_until_due: int
