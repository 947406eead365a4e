import os
import duckdb
import logging

DB_FILE = os.getenv("BUDGET_DB_FILE", "budget.duckdb")
LOG_FILE = os.getenv("BUDGET_LOG_FILE", "budget.log")

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(
    filename=LOG_FILE,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

def log_info(msg):
    logging.info(msg)
    print(msg)

def log_error(msg):
    logging.error(msg)
    print(msg)

# -----------------------------
# Built-in categories
# -----------------------------
# (id, name, type); owner is NULL for built-ins
DEFAULT_CATEGORIES = [
    ("alimentacao", "Alimentação", "expense"),
    ("transporte", "Transporte", "expense"),
    ("moradia", "Moradia", "expense"),
    ("saude", "Saúde", "expense"),
    ("lazer", "Lazer", "expense"),
    ("outros-despesa", "Outros", "expense"),
    ("salario", "Salário", "income"),
    ("freelance", "Freelance", "income"),
    ("investimentos", "Investimentos", "income"),
    ("outros-receita", "Outros", "income"),
]

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)

# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        for seq in ("transactions_id_seq", "obligations_id_seq",
                    "budgets_id_seq", "goals_id_seq"):
            conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {seq} START 1")

        # Categories table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id VARCHAR PRIMARY KEY,
            owner VARCHAR,
            name VARCHAR NOT NULL,
            type VARCHAR NOT NULL CHECK(type IN ('income','expense'))
        );
        """)
        log_info("Categories table ensured.")

        # Transactions table (the ledger)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id BIGINT PRIMARY KEY DEFAULT nextval('transactions_id_seq'),
            owner VARCHAR NOT NULL,
            type VARCHAR NOT NULL CHECK(type IN ('income','expense')),
            description VARCHAR NOT NULL,
            category VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            date DATE NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Transactions table ensured.")

        # Recurring obligations table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS recurring_obligations (
            id BIGINT PRIMARY KEY DEFAULT nextval('obligations_id_seq'),
            owner VARCHAR NOT NULL,
            description VARCHAR NOT NULL,
            category VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            frequency VARCHAR NOT NULL,
            next_due_date DATE NOT NULL,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Recurring obligations table ensured.")

        # Budgets table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS budgets (
            id BIGINT PRIMARY KEY DEFAULT nextval('budgets_id_seq'),
            owner VARCHAR NOT NULL,
            category VARCHAR NOT NULL,
            limit_amount DECIMAL(12,2) NOT NULL,
            period VARCHAR NOT NULL CHECK(period IN ('monthly','annual'))
        );
        """)
        log_info("Budgets table ensured.")

        # Goals table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS goals (
            id BIGINT PRIMARY KEY DEFAULT nextval('goals_id_seq'),
            owner VARCHAR NOT NULL,
            name VARCHAR NOT NULL,
            target_amount DECIMAL(12,2) NOT NULL,
            current_amount DECIMAL(12,2) NOT NULL DEFAULT 0,
            deadline DATE,
            category VARCHAR
        );
        """)
        log_info("Goals table ensured.")

        # Indexes (only on columns that are never updated in place)
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_owner_date ON transactions(owner, date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_obligations_owner ON recurring_obligations(owner);")
        log_info("Indexes created/ensured.")

        # Built-in categories
        for category_id, name, category_type in DEFAULT_CATEGORIES:
            conn.execute("""
            INSERT INTO categories (id, owner, name, type)
            SELECT ?, NULL, ?, ?
            WHERE NOT EXISTS (SELECT 1 FROM categories WHERE id = ?);
            """, (category_id, name, category_type, category_id))
        log_info("Default categories ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
