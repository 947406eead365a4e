"""Domain exceptions raised by the obligation, budget and goal services.

Every error is terminal for the operation that raised it; nothing in the
services retries. Routes translate these into HTTP responses.
"""


class BudgetError(Exception):
    """Base class for all domain errors."""


class ValidationError(BudgetError, ValueError):
    """Input data does not meet validation requirements."""


class InvalidFrequency(ValidationError):
    """Unrecognized recurrence frequency tag."""

    def __init__(self, frequency):
        super().__init__(f"Invalid frequency: {frequency!r}")
        self.frequency = frequency


class InvalidPeriod(ValidationError):
    """Unrecognized budget period."""

    def __init__(self, period):
        super().__init__(f"Invalid budget period: {period!r}")
        self.period = period


class InactiveObligation(BudgetError):
    def __init__(self, obligation_id):
        super().__init__(f"Obligation {obligation_id} is inactive")
        self.obligation_id = obligation_id


class NonPositiveContribution(ValidationError):
    def __init__(self, amount):
        super().__init__(f"Contribution must be positive, got {amount}")
        self.amount = amount


class NotFound(BudgetError, LookupError):
    """Record missing, or not visible to the requesting owner."""


class PermissionDenied(BudgetError):
    """Record exists but belongs to another owner."""


class WriteFailed(BudgetError):
    """The store rejected a write."""


class LedgerWriteFailed(WriteFailed):
    """The transaction store rejected a ledger insert."""
