"""
Obligation Payment Service — turns a recurring obligation's payment into a
ledger transaction and rolls the obligation forward.

The ledger insert and the due date update run in one DuckDB transaction:
either both land or neither does. Concurrent payments of the same
obligation are not coordinated here (last write wins).
"""
import logging
from dataclasses import dataclass, replace
from datetime import date

import duckdb

from db import get_db
from models.obligation import RecurringObligation
from models.transaction import EXPENSE, LedgerTransaction
from repositories import obligations_repository, transactions_repository
from services.errors import InactiveObligation, LedgerWriteFailed, NotFound, WriteFailed
from services.recurrence_service import due_date_after_payment


@dataclass
class PaymentResult:
    transaction: LedgerTransaction
    obligation: RecurringObligation

    def to_dict(self):
        return {
            "transaction": self.transaction.to_dict(),
            "obligation": self.obligation.to_dict(),
        }


def build_payment_transaction(obligation: RecurringObligation) -> LedgerTransaction:
    """Ledger entry for the obligation, dated on its scheduled due date."""
    return LedgerTransaction(
        id=None,
        owner=obligation.owner,
        type=EXPENSE,
        description=obligation.description,
        category=obligation.category,
        amount=obligation.amount,
        date=obligation.next_due_date,
    )


def pay_obligation(conn, obligation: RecurringObligation, today: date) -> PaymentResult:
    """
    Record a payment and advance the obligation, atomically.

    Args:
        conn: DuckDB connection; no transaction may be open on it.
        obligation: The obligation being paid, as currently stored.
        today: Reference date for advancing the due date.

    Returns:
        PaymentResult with the created transaction and the updated obligation.

    Raises:
        InactiveObligation: obligation is deactivated; nothing is written.
        LedgerWriteFailed: the ledger insert was rejected; nothing is written.
        WriteFailed: the obligation update was rejected; the insert is rolled back.
    """
    if not obligation.active:
        raise InactiveObligation(obligation.id)

    transaction = build_payment_transaction(obligation)
    new_due = due_date_after_payment(obligation.next_due_date, obligation.frequency, today)

    conn.begin()
    try:
        try:
            transaction_id = transactions_repository.insert_transaction(conn, transaction)
        except duckdb.Error as e:
            raise LedgerWriteFailed(f"Ledger rejected payment of obligation {obligation.id}: {e}") from e

        try:
            updated = obligations_repository.update_next_due_date(conn, obligation.id, new_due)
        except duckdb.Error as e:
            raise WriteFailed(f"Could not advance obligation {obligation.id}: {e}") from e
        if not updated:
            raise WriteFailed(f"Obligation {obligation.id} disappeared during payment")

        conn.commit()
    except Exception:
        conn.rollback()
        logging.warning(f"Payment of obligation {obligation.id} rolled back")
        raise

    logging.info(
        f"Obligation {obligation.id} paid on {transaction.date} "
        f"(transaction {transaction_id}); next due {new_due}"
    )
    return PaymentResult(
        transaction=replace(transaction, id=transaction_id),
        obligation=replace(obligation, next_due_date=new_due),
    )


def mark_obligation_paid(owner, obligation_id, today: date) -> PaymentResult:
    """Load the owner's obligation and pay it."""
    conn = get_db()
    try:
        obligation = obligations_repository.get_obligation(conn, obligation_id)
        if obligation is None or obligation.owner != owner:
            raise NotFound(f"Obligation {obligation_id} not found")
        return pay_obligation(conn, obligation, today)
    finally:
        conn.close()
