"""Tests for the case-type roll-up."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import (
    CaseRecord,
    CaseTypeTotals,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.domain.services.summary import summary_by_case_type


CHART = [
    ChartOfAccountRecord("D100", "Dividend", "Expense", "Distributions"),
]


def _txn(txn_id: str, case_id: str, kind: str, amount: str, **kwargs):
    return TransactionRecord(
        id=txn_id,
        case_id=case_id,
        transaction_type=kind,
        account_type="case_account",
        status="approved",
        amount=amount,
        **kwargs,
    )


def test_summary_groups_funds_by_case_type() -> None:
    """Held funds are clamped per case and distributed summed as is."""
    cases = [
        CaseRecord(id="a", case_type="CVL"),
        CaseRecord(id="b", case_type="CVL"),
        CaseRecord(id="c", case_type="MVL"),
        CaseRecord(id="d", case_type=""),
    ]
    transactions = [
        _txn("t1", "a", "receipt", "1000"),
        _txn("t2", "a", "payment", "400", account_code="D100"),
        _txn("t3", "b", "payment", "250", account_code="D100"),
        _txn("t4", "c", "receipt", "80"),
        _txn("t5", "d", "receipt", "5000"),
    ]

    summary = summary_by_case_type(cases, transactions, CHART, MagicMock())

    assert summary == {
        "CVL": CaseTypeTotals(
            total_held=Decimal("600"),
            total_distributed=Decimal("650"),
            case_count=2,
        ),
        "MVL": CaseTypeTotals(
            total_held=Decimal("80"),
            total_distributed=Decimal("0"),
            case_count=1,
        ),
    }


def test_summary_of_no_cases_is_empty() -> None:
    """No cases should give an empty summary."""
    assert summary_by_case_type([], [], CHART, MagicMock()) == {}


def test_summary_ignores_non_finite_amounts() -> None:
    """NaN or infinite amounts should count as zero, not break the page."""
    cases = [CaseRecord(id="a", case_type="CVL")]
    transactions = [
        _txn("t1", "a", "receipt", "500"),
        _txn("t2", "a", "payment", "NaN"),
        _txn("t3", "a", "payment", "Infinity", account_code="D100"),
    ]

    summary = summary_by_case_type(cases, transactions, CHART, MagicMock())

    assert summary == {
        "CVL": CaseTypeTotals(
            total_held=Decimal("500"),
            total_distributed=Decimal("0"),
            case_count=1,
        ),
    }
