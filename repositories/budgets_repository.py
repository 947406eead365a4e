from decimal import Decimal

from models.budget import Budget

# -----------------------------
# Budgets Repository
# -----------------------------

def _row_to_budget(row):
    return Budget(
        id=row[0],
        owner=row[1],
        category=row[2],
        limit=Decimal(row[3]),
        period=row[4],
    )


def insert_budget(conn, budget):
    row = conn.execute(
        """
        INSERT INTO budgets (owner, category, limit_amount, period)
        VALUES (?, ?, ?, ?)
        RETURNING id
        """,
        (budget.owner, budget.category, budget.limit, budget.period)
    ).fetchone()
    return row[0]


def get_budget(conn, budget_id):
    row = conn.execute(
        "SELECT id, owner, category, limit_amount, period FROM budgets WHERE id = ?",
        (budget_id,)
    ).fetchone()
    return _row_to_budget(row) if row else None


def list_budgets(conn, owner):
    rows = conn.execute(
        """
        SELECT id, owner, category, limit_amount, period
        FROM budgets
        WHERE owner = ?
        ORDER BY category, id
        """,
        (owner,)
    ).fetchall()
    return [_row_to_budget(r) for r in rows]


def delete_budget(conn, budget_id):
    conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
