"""Tests for the SQLAlchemy ledger poster on SQLite."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from src.domain.errors import LedgerPostingError
from src.domain.models import DoubleEntryRequest
from src.infrastructure.ledger_poster import SqlAlchemyLedgerPoster
from src.infrastructure.schema import ensure_schema


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.sqlite'}")
    ensure_schema(engine)
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO chart_of_accounts VALUES "
                "('BANK01', 'Cash at Bank', 'Assets', 'Bank'), "
                "('R400', 'Book debts', 'Income', 'Asset Realisations')"
            )
        )
    return engine


@pytest.fixture
def poster(engine):
    db_port = SimpleNamespace(get_cashiering_engine=lambda: engine)
    return SqlAlchemyLedgerPoster(db_port, logger=MagicMock())


def _request(**kwargs) -> DoubleEntryRequest:
    values = {
        "case_id": "case-1",
        "transaction_id": "t1",
        "transaction_date": "2025-05-19T12:00:00",
        "description": "Sale of stock",
        "net_amount": Decimal("100"),
        "vat_amount": Decimal("20"),
        "gross_amount": Decimal("120"),
        "transaction_type": "receipt",
        "account_code": "R400",
        "bank_account_code": "BANK01",
    }
    values.update(kwargs)
    return DoubleEntryRequest(**values)


def test_post_double_entry_inserts_lines_and_vat_accounts(poster, engine):
    """Posting should create missing VAT accounts and three entries."""
    entries = poster.post_double_entry(_request())

    assert [entry.account_code for entry in entries] == [
        "BANK01",
        "R400",
        "VAT002",
    ]
    with engine.connect() as conn:
        codes = conn.execute(
            text("SELECT account_code FROM chart_of_accounts ORDER BY 1")
        ).scalars().all()
        rows = conn.execute(
            text(
                "SELECT account_code, debit_amount, credit_amount, "
                "entry_date, journal_type, reference "
                "FROM accounting_entries ORDER BY account_code"
            )
        ).all()

    assert codes == ["BANK01", "R400", "VAT001", "VAT002"]
    assert [(row.account_code, row.debit_amount, row.credit_amount) for row in rows] == [
        ("BANK01", 120, 0),
        ("R400", 0, 100),
        ("VAT002", 0, 20),
    ]
    assert {row.entry_date for row in rows} == {"2025-05-19"}
    assert {row.journal_type for row in rows} == {"receipts"}
    assert {row.reference for row in rows} == {"t1"}


def test_post_double_entry_writes_nothing_on_unknown_code(poster, engine):
    """A failed build should roll back the whole posting."""
    with pytest.raises(LedgerPostingError):
        poster.post_double_entry(_request(account_code="X999"))

    with engine.connect() as conn:
        count = conn.execute(
            text("SELECT COUNT(*) FROM accounting_entries")
        ).scalar_one()
        vat_accounts = conn.execute(
            text(
                "SELECT COUNT(*) FROM chart_of_accounts "
                "WHERE account_code LIKE 'VAT%'"
            )
        ).scalar_one()
    assert count == 0
    assert vat_accounts == 0


def test_post_double_entry_rejects_invalid_date(poster):
    """Unparseable dates should raise LedgerPostingError."""
    with pytest.raises(LedgerPostingError, match="Invalid transaction date"):
        poster.post_double_entry(_request(transaction_date="19/05/2025"))
