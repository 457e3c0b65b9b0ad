"""Tests for the ApproveTransactionUseCase."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.approve_transaction import (
    APPROVAL_STEPS,
    ApproveTransactionUseCase,
)
from src.domain.errors import (
    ApprovalStepError,
    PostingValidationError,
    TransactionNotFoundError,
)
from src.domain.models import (
    BankDetails,
    CaseFunds,
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionRecord,
)


CASE = CaseRecord(
    id="case-1",
    company_name="Acme Ltd",
    case_reference="RC25",
    bank_details=BankDetails(bank_name="Barclays", chart_of_accounts="BANK01"),
)
CHART = [
    ChartOfAccountRecord("BANK01", "Cash at Bank", "Assets", "Bank"),
    ChartOfAccountRecord("E500", "Agents fees", "Expense", "Costs"),
]
USER = CashieringUser(
    email="ip@example.com",
    full_name="Jane Doe",
    grade="IP",
    signature_image_url="file:///signatures/jane.png",
)
PENDING = TransactionRecord(
    id="t1",
    case_id="case-1",
    transaction_type="payment",
    account_type="case_account",
    status="pending_approval",
    amount=Decimal("120"),
    net_amount=Decimal("100"),
    vat_amount=Decimal("20"),
    account_code="E500",
    transaction_date="2025-05-19",
    payee_name="Agent Ltd",
    description="Agents",
)
APPROVED = replace(PENDING, status="approved", approver_name="Jane Doe")
FIXED_NOW = datetime(2025, 5, 20, 9, 30, tzinfo=timezone.utc)


def _build(funds=CaseFunds("case-1", Decimal("0"), Decimal("0"))):
    repository = MagicMock()
    repository.fetch_transaction.return_value = PENDING
    repository.fetch_case.return_value = CASE
    repository.fetch_chart_of_accounts.return_value = CHART
    writer = MagicMock()
    writer.update_transaction.return_value = APPROVED
    documents = MagicMock()
    ledger = MagicMock()
    funds_updater = MagicMock()
    funds_updater.execute.return_value = funds
    use_case = ApproveTransactionUseCase(
        repository,
        writer,
        documents,
        ledger,
        funds_updater,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        clock=lambda: FIXED_NOW,
    )
    return use_case, writer, documents, ledger, funds_updater


def test_execute_runs_every_step_in_order() -> None:
    """Approval should update, store the voucher, post and refresh."""
    use_case, writer, documents, ledger, funds_updater = _build()
    calls = MagicMock()
    calls.attach_mock(writer.update_transaction, "approve")
    calls.attach_mock(documents.store_voucher, "voucher")
    calls.attach_mock(ledger.post_double_entry, "ledger")
    calls.attach_mock(funds_updater.execute, "funds")

    result = use_case.execute("t1", USER)

    assert result == APPROVED
    assert [call[0] for call in calls.mock_calls] == list(APPROVAL_STEPS)
    writer.update_transaction.assert_called_once_with(
        "t1",
        {
            "status": "approved",
            "approver_signature_url": "file:///signatures/jane.png",
            "approver_signed_by": "ip@example.com",
            "approver_signed_date": "2025-05-20T09:30:00+00:00",
            "approver_name": "Jane Doe",
            "approver_grade": "IP",
        },
    )
    case_id, filename, content, doc_type, _ = (
        documents.store_voucher.call_args.args
    )
    assert case_id == "case-1"
    assert filename == "PV-RC25-AGENTLTD-19MAY2025"
    assert doc_type == "Payment Voucher"
    assert "<html>" in content
    request = ledger.post_double_entry.call_args.args[0]
    assert request.bank_account_code == "BANK01"
    assert request.gross_amount == Decimal("120")
    funds_updater.execute.assert_called_once_with("case-1")


def test_failed_voucher_stops_before_posting() -> None:
    """A voucher failure should report the step and keep the approval."""
    use_case, writer, documents, ledger, funds_updater = _build()
    documents.store_voucher.side_effect = OSError("disk full")

    with pytest.raises(ApprovalStepError) as excinfo:
        use_case.execute("t1", USER)

    assert excinfo.value.step == "voucher"
    assert excinfo.value.completed_steps == ("approve",)
    assert "disk full" in str(excinfo.value)
    writer.update_transaction.assert_called_once()
    ledger.post_double_entry.assert_not_called()
    funds_updater.execute.assert_not_called()


def test_failed_funds_refresh_does_not_fail_approval() -> None:
    """A funds write-back returning None is logged by the updater only."""
    use_case, writer, documents, ledger, funds_updater = _build(funds=None)

    result = use_case.execute("t1", USER)

    assert result == APPROVED
    writer.update_transaction.assert_called_once()
    documents.store_voucher.assert_called_once()
    ledger.post_double_entry.assert_called_once()
    funds_updater.execute.assert_called_once_with("case-1")
    use_case._usage_logger.info.assert_called_once()


def test_validation_failure_writes_nothing() -> None:
    """Users without the posting grade should not change anything."""
    use_case, writer, documents, ledger, _ = _build()
    clerk = replace(USER, grade="Cashier")

    with pytest.raises(PostingValidationError, match="IP grade"):
        use_case.execute("t1", clerk)

    writer.update_transaction.assert_not_called()
    documents.store_voucher.assert_not_called()
    ledger.post_double_entry.assert_not_called()


def test_already_approved_transaction_is_rejected() -> None:
    """Approving twice should not post a second double entry."""
    use_case, writer, _, _, _ = _build()
    use_case._repository.fetch_transaction.return_value = APPROVED

    with pytest.raises(PostingValidationError, match="already been approved"):
        use_case.execute("t1", USER)

    writer.update_transaction.assert_not_called()


def test_missing_transaction_raises_not_found() -> None:
    """Unknown ids should raise TransactionNotFoundError."""
    use_case, _, _, _, _ = _build()
    use_case._repository.fetch_transaction.return_value = None

    with pytest.raises(TransactionNotFoundError):
        use_case.execute("missing", USER)
