import logging
import re
import unicodedata
from dataclasses import replace

import duckdb

from db import get_db
from models.transaction import TRANSACTION_TYPES, LedgerTransaction
from repositories import transactions_repository as repo
from repositories.categories_repository import add_category, is_valid_category
from services.errors import NotFound, PermissionDenied, ValidationError
from services.obligation_service import sanitize_description, validate_amount


def get_all_transactions(owner, limit=None):
    """Return an owner's transactions, newest first.

    Opens and closes a database connection on the caller’s behalf.
    """
    conn = get_db()
    try:
        return repo.get_all_transactions(conn, owner, limit=limit)
    finally:
        conn.close()


def add_transaction(*, owner, type, description, category, amount, date):
    """Service wrapper around repository insert.

    Validates the type, description and amount, and requires a category
    valid for the transaction type (built-in or owned by ``owner``).
    """
    if type not in TRANSACTION_TYPES:
        raise ValidationError(f"Invalid transaction type: {type!r}")

    transaction = LedgerTransaction(
        id=None,
        owner=owner,
        type=type,
        description=sanitize_description(description),
        category=category,
        amount=validate_amount(amount),
        date=date,
    )

    conn = get_db()
    try:
        if not is_valid_category(conn, owner, category, type):
            raise ValidationError(f"Unknown {type} category: {category!r}")
        transaction = replace(transaction, id=repo.insert_transaction(conn, transaction))
    finally:
        conn.close()

    logging.info(f"Transaction {transaction.id} added for {owner}: {type} {transaction.amount}")
    return transaction


def delete_transaction(owner, transaction_id):
    conn = get_db()
    try:
        tx = repo.get_transaction_by_id(conn, transaction_id)
        if tx is None:
            raise NotFound(f"Transaction {transaction_id} not found")
        if tx.owner != owner:
            raise PermissionDenied(f"Transaction {transaction_id} belongs to another user")
        repo.delete_transaction(conn, transaction_id)
    finally:
        conn.close()
    logging.info(f"Transaction {transaction_id} deleted by {owner}")


def _category_slug(name):
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")


def create_category(owner, name, category_type):
    """Add a custom category for ``owner``.

    The id is the slugged name suffixed with the owner, so two users can
    both have a "Pets" category and neither shadows a built-in id.
    """
    if category_type not in TRANSACTION_TYPES:
        raise ValidationError(f"Invalid category type: {category_type!r}")
    name = sanitize_description(name)
    slug = _category_slug(name)
    if not slug:
        raise ValidationError(f"Category name {name!r} has no usable characters")
    category_id = f"{slug}-{_category_slug(owner)}"

    conn = get_db()
    try:
        add_category(conn, category_id, owner, name, category_type)
    except duckdb.ConstraintException as e:
        raise ValidationError(f"Category {name!r} already exists") from e
    finally:
        conn.close()

    logging.info(f"Category {category_id} created for {owner}")
    return {"id": category_id, "owner": owner, "name": name, "type": category_type}
