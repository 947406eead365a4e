from db import get_db


def get_categories(conn=None, owner=None, category_type=None):
    """
    Return built-in categories plus the owner's custom ones.

    Args:
        conn: Optional database connection. If not provided, opens a new one.
        owner: Owner whose custom categories are included.
        category_type: Optional 'income' or 'expense' filter.

    Returns:
        List of dicts with 'id', 'owner', 'name' and 'type' keys.
    """
    own_conn = False
    if conn is None:
        conn = get_db()
        own_conn = True

    try:
        query = """
            SELECT id, owner, name, type
            FROM categories
            WHERE (owner IS NULL OR owner = ?)
        """
        params = [owner]
        if category_type:
            query += " AND type = ?"
            params.append(category_type)
        query += " ORDER BY owner NULLS FIRST, name"

        rows = conn.execute(query, params).fetchall()
        return [
            {"id": r[0], "owner": r[1], "name": r[2], "type": r[3]}
            for r in rows
        ]
    finally:
        if own_conn:
            conn.close()


def add_category(conn, category_id, owner, name, category_type):
    conn.execute(
        "INSERT INTO categories (id, owner, name, type) VALUES (?, ?, ?, ?)",
        (category_id, owner, name, category_type)
    )


def display_name_to_ids(conn, owner, display_name):
    """
    Map a category display name to every matching category id.

    Built-in and custom categories can share a name (e.g. two "Outros"),
    so the result may hold several ids. Matching ignores case; the ids
    themselves are also accepted as names.
    """
    rows = conn.execute(
        """
        SELECT id
        FROM categories
        WHERE (owner IS NULL OR owner = ?)
          AND (lower(name) = lower(?) OR lower(id) = lower(?))
        ORDER BY id
        """,
        (owner, display_name, display_name)
    ).fetchall()
    return [r[0] for r in rows]


def is_valid_category(conn, owner, category_id, category_type):
    row = conn.execute(
        """
        SELECT 1
        FROM categories
        WHERE id = ? AND type = ? AND (owner IS NULL OR owner = ?)
        """,
        (category_id, category_type, owner)
    ).fetchone()
    return bool(row)
