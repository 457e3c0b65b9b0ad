"""Table definitions for the cashiering database."""

from sqlalchemy.engine import Engine


CREATE_CASES_SQL = """
CREATE TABLE IF NOT EXISTS cases (
    id TEXT PRIMARY KEY,
    company_name TEXT,
    case_reference TEXT,
    case_type TEXT,
    administrator_name TEXT,
    bank_details TEXT,
    secondary_bank_details TEXT,
    initial_bond_value NUMERIC,
    bond_increases TEXT,
    soa_etr NUMERIC,
    appointment_date TEXT,
    closure_date TEXT,
    status TEXT,
    bonding_archived BOOLEAN DEFAULT FALSE,
    total_funds_held NUMERIC,
    total_funds_distributed NUMERIC,
    created_date TEXT
)
"""

CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    case_id TEXT NOT NULL,
    transaction_type TEXT,
    account_type TEXT,
    target_account TEXT,
    status TEXT,
    amount NUMERIC,
    net_amount NUMERIC,
    vat_amount NUMERIC,
    account_code TEXT,
    bank_request_date TEXT,
    transaction_date TEXT,
    description TEXT,
    payee_name TEXT,
    invoice_number TEXT,
    reference TEXT,
    approver_name TEXT,
    approver_signed_by TEXT,
    approver_signed_date TEXT,
    approver_grade TEXT,
    approver_signature_url TEXT,
    created_date TEXT
)
"""

CREATE_ACCOUNTING_ENTRIES_SQL = """
CREATE TABLE IF NOT EXISTS accounting_entries (
    id TEXT PRIMARY KEY,
    case_id TEXT NOT NULL,
    transaction_id TEXT,
    account_code TEXT NOT NULL,
    account_name TEXT,
    account_type TEXT,
    account_group TEXT,
    debit_amount NUMERIC,
    credit_amount NUMERIC,
    entry_date TEXT,
    description TEXT,
    journal_type TEXT,
    reference TEXT
)
"""

CREATE_CHART_OF_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS chart_of_accounts (
    account_code TEXT PRIMARY KEY,
    account_name TEXT,
    account_type TEXT,
    account_group TEXT
)
"""

CREATE_USERS_SQL = """
CREATE TABLE IF NOT EXISTS users (
    email TEXT PRIMARY KEY,
    full_name TEXT,
    grade TEXT,
    signature_image_url TEXT
)
"""

CREATE_DOCUMENTS_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    case_id TEXT NOT NULL,
    doc_type TEXT,
    file_url TEXT,
    raw_text TEXT,
    created_date TEXT
)
"""

SCHEMA_STATEMENTS = (
    CREATE_CASES_SQL,
    CREATE_TRANSACTIONS_SQL,
    CREATE_ACCOUNTING_ENTRIES_SQL,
    CREATE_CHART_OF_ACCOUNTS_SQL,
    CREATE_USERS_SQL,
    CREATE_DOCUMENTS_SQL,
)


def ensure_schema(engine: Engine) -> None:
    """Create the cashiering tables that do not exist yet.

    Args:
        engine: SQLAlchemy engine for the cashiering database.
    """
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.exec_driver_sql(statement)


__all__ = ["SCHEMA_STATEMENTS", "ensure_schema"]
