import pytest

import db


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the app at a fresh DuckDB file with the schema and default categories."""
    db_path = tmp_path / "budget.duckdb"
    monkeypatch.setattr(db, "DB_FILE", str(db_path))
    db.init_db()
    return db_path
