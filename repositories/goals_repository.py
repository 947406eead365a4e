from decimal import Decimal

from models.goal import Goal

# -----------------------------
# Goals Repository
# -----------------------------

GOAL_COLUMNS = "id, owner, name, target_amount, current_amount, deadline, category"


def _row_to_goal(row):
    return Goal(
        id=row[0],
        owner=row[1],
        name=row[2],
        target_amount=Decimal(row[3]),
        current_amount=Decimal(row[4]),
        deadline=row[5],
        category=row[6],
    )


def insert_goal(conn, goal):
    row = conn.execute(
        """
        INSERT INTO goals (owner, name, target_amount, current_amount, deadline, category)
        VALUES (?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (goal.owner, goal.name, goal.target_amount, goal.current_amount,
         goal.deadline, goal.category)
    ).fetchone()
    return row[0]


def get_goal(conn, goal_id):
    row = conn.execute(
        f"SELECT {GOAL_COLUMNS} FROM goals WHERE id = ?",
        (goal_id,)
    ).fetchone()
    return _row_to_goal(row) if row else None


def list_goals(conn, owner):
    rows = conn.execute(
        f"SELECT {GOAL_COLUMNS} FROM goals WHERE owner = ? ORDER BY deadline NULLS LAST, id",
        (owner,)
    ).fetchall()
    return [_row_to_goal(r) for r in rows]


def update_current_amount(conn, goal_id, current_amount):
    row = conn.execute(
        "UPDATE goals SET current_amount = ? WHERE id = ? RETURNING id",
        (current_amount, goal_id)
    ).fetchone()
    return row is not None


def delete_goal(conn, goal_id):
    conn.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
