from decimal import Decimal

from models.transaction import LedgerTransaction

# -----------------------------
# Transactions Repository
# -----------------------------

TRANSACTION_COLUMNS = "id, owner, type, description, category, amount, date, created_at"


def _row_to_transaction(row):
    return LedgerTransaction(
        id=row[0],
        owner=row[1],
        type=row[2],
        description=row[3],
        category=row[4],
        amount=Decimal(row[5]),
        date=row[6],
        created_at=row[7],
    )


def insert_transaction(conn, transaction):
    """
    Inserts a ledger transaction and returns its new id.
    - conn: DuckDB connection (from get_db() or passed in)
    - transaction: LedgerTransaction; its id is ignored
    """
    row = conn.execute(
        """
        INSERT INTO transactions (owner, type, description, category, amount, date)
        VALUES (?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (transaction.owner, transaction.type, transaction.description,
         transaction.category, transaction.amount, transaction.date)
    ).fetchone()
    return row[0]


def get_transaction_by_id(conn, transaction_id):
    row = conn.execute(
        f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = ?",
        (transaction_id,)
    ).fetchone()
    return _row_to_transaction(row) if row else None


def get_all_transactions(conn, owner, start_date=None, end_date=None, limit=None):
    """
    Returns an owner's transactions, newest first.
    - start_date / end_date: optional inclusive date bounds
    - limit: optional, max number of rows
    """
    query = f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE owner = ?"
    params = [owner]

    if start_date:
        query += " AND date >= ?"
        params.append(start_date)
    if end_date:
        query += " AND date <= ?"
        params.append(end_date)

    query += " ORDER BY date DESC, created_at DESC, id DESC"

    if limit:
        query += " LIMIT ?"
        params.append(limit)

    rows = conn.execute(query, params).fetchall()
    return [_row_to_transaction(r) for r in rows]


def sum_by_category_and_date_range(conn, owner, category_ids, start_date, end_date):
    """
    Sums an owner's expense amounts for any of ``category_ids`` within the
    inclusive date range. Category ids are compared case-insensitively.
    """
    if not category_ids:
        return Decimal("0.00")

    placeholders = ", ".join("?" for _ in category_ids)
    row = conn.execute(
        f"""
        SELECT COALESCE(SUM(amount), 0)
        FROM transactions
        WHERE owner = ?
          AND type = 'expense'
          AND lower(category) IN ({placeholders})
          AND date BETWEEN ? AND ?
        """,
        [owner, *[c.lower() for c in category_ids], start_date, end_date]
    ).fetchone()
    return Decimal(row[0]).quantize(Decimal("0.01"))


def delete_transaction(conn, transaction_id):
    conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
