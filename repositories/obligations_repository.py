from decimal import Decimal

from models.obligation import Frequency, RecurringObligation

# -----------------------------
# Recurring Obligations Repository
# -----------------------------

OBLIGATION_COLUMNS = "id, owner, description, category, amount, frequency, next_due_date, active"

# columns an owner may edit directly
EDITABLE_FIELDS = ("description", "category", "amount", "frequency", "next_due_date", "active")


def _row_to_obligation(row):
    return RecurringObligation(
        id=row[0],
        owner=row[1],
        description=row[2],
        category=row[3],
        amount=Decimal(row[4]),
        frequency=Frequency(row[5]),
        next_due_date=row[6],
        active=bool(row[7]),
    )


def insert_obligation(conn, obligation):
    """Insert a new obligation and return its id."""
    row = conn.execute(
        """
        INSERT INTO recurring_obligations
        (owner, description, category, amount, frequency, next_due_date, active)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (obligation.owner, obligation.description, obligation.category,
         obligation.amount, obligation.frequency.value,
         obligation.next_due_date, obligation.active)
    ).fetchone()
    return row[0]


def get_obligation(conn, obligation_id):
    row = conn.execute(
        f"SELECT {OBLIGATION_COLUMNS} FROM recurring_obligations WHERE id = ?",
        (obligation_id,)
    ).fetchone()
    return _row_to_obligation(row) if row else None


def list_active(conn, owner):
    """Active obligations for an owner, soonest due first."""
    rows = conn.execute(
        f"""
        SELECT {OBLIGATION_COLUMNS}
        FROM recurring_obligations
        WHERE owner = ? AND active = TRUE
        ORDER BY next_due_date, id
        """,
        (owner,)
    ).fetchall()
    return [_row_to_obligation(r) for r in rows]


def update_obligation(conn, obligation_id, fields):
    """
    Update the given columns of an obligation.

    Args:
        conn: Database connection.
        obligation_id: ID of the obligation to update.
        fields: Mapping of column name to new value; keys must be in EDITABLE_FIELDS.

    Returns:
        True if a row was updated, False if no such obligation exists.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update obligation fields: {', '.join(sorted(unknown))}")
    if not fields:
        return get_obligation(conn, obligation_id) is not None

    assignments = ", ".join(f"{column} = ?" for column in fields)
    params = [
        value.value if isinstance(value, Frequency) else value
        for value in fields.values()
    ]
    row = conn.execute(
        f"UPDATE recurring_obligations SET {assignments} WHERE id = ? RETURNING id",
        [*params, obligation_id]
    ).fetchone()
    return row is not None


def update_next_due_date(conn, obligation_id, next_due_date):
    return update_obligation(conn, obligation_id, {"next_due_date": next_due_date})


def delete_obligation(conn, obligation_id):
    row = conn.execute(
        "DELETE FROM recurring_obligations WHERE id = ? RETURNING id",
        (obligation_id,)
    ).fetchone()
    return row is not None
