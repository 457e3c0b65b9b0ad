"""Tests for the UpdateCaseFundsUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.update_case_funds import (
    UpdateCaseFundsUseCase,
)
from src.domain.models import (
    CaseFunds,
    ChartOfAccountRecord,
    TransactionRecord,
)


def _repository() -> MagicMock:
    repository = MagicMock()
    repository.fetch_transactions.return_value = [
        TransactionRecord(
            id="t1",
            case_id="case-1",
            transaction_type="receipt",
            account_type="case_account",
            status="approved",
            amount=Decimal("900"),
        ),
        TransactionRecord(
            id="t2",
            case_id="case-1",
            transaction_type="payment",
            account_type="case_account",
            status="approved",
            amount=Decimal("300"),
            account_code="D100",
        ),
        TransactionRecord(
            id="t3",
            case_id="case-2",
            transaction_type="receipt",
            account_type="case_account",
            status="approved",
            amount=Decimal("50"),
        ),
    ]
    repository.fetch_chart_of_accounts.return_value = [
        ChartOfAccountRecord("D100", account_group="Distributions"),
    ]
    return repository


def test_execute_writes_recomputed_funds() -> None:
    """Funds should be computed from transactions and persisted."""
    writer = MagicMock()

    funds = UpdateCaseFundsUseCase(
        _repository(), writer, logger=MagicMock()
    ).execute("case-1")

    expected = CaseFunds(
        case_id="case-1",
        total_funds_held=Decimal("600"),
        total_funds_distributed=Decimal("300"),
    )
    assert funds == expected
    writer.update_case_funds.assert_called_once_with(expected)


def test_execute_returns_none_when_write_fails() -> None:
    """A failing write should be logged and reported as None."""
    writer = MagicMock()
    writer.update_case_funds.side_effect = RuntimeError("locked")
    logger = MagicMock()

    funds = UpdateCaseFundsUseCase(
        _repository(), writer, logger=logger
    ).execute("case-1")

    assert funds is None
    logger.error.assert_called_once()


def test_execute_many_reads_once_and_isolates_failures() -> None:
    """One failing case should not stop the others."""
    repository = _repository()
    writer = MagicMock()
    writer.update_case_funds.side_effect = [RuntimeError("locked"), None]

    results = UpdateCaseFundsUseCase(
        repository, writer, logger=MagicMock()
    ).execute_many(["case-1", "case-2"])

    assert results["case-1"] is None
    assert results["case-2"].total_funds_held == Decimal("50")
    repository.fetch_transactions.assert_called_once_with()
    repository.fetch_chart_of_accounts.assert_called_once_with()


def test_execute_many_returns_none_for_all_when_read_fails() -> None:
    """A failed read should leave every case unchanged."""
    repository = _repository()
    repository.fetch_transactions.side_effect = RuntimeError("down")
    writer = MagicMock()

    results = UpdateCaseFundsUseCase(
        repository, writer, logger=MagicMock()
    ).execute_many(["case-1", "case-2"])

    assert results == {"case-1": None, "case-2": None}
    writer.update_case_funds.assert_not_called()
