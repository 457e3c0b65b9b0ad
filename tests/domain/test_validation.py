"""Tests for posting and edit validation."""

from decimal import Decimal

import pytest

from src.domain.errors import PostingValidationError
from src.domain.models import (
    BankDetails,
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionEdit,
    TransactionRecord,
)
from src.domain.services.validation import (
    validate_for_posting,
    validate_transaction_edit,
)


CHART = [ChartOfAccountRecord("E500", "Agents fees", "Expense", "Costs")]
CASE = CaseRecord(
    id="case-1",
    bank_details=BankDetails(bank_name="Barclays", chart_of_accounts="BANK01"),
    secondary_bank_details=BankDetails(bank_name="HSBC"),
)
USER = CashieringUser(
    email="ip@example.com",
    full_name="Jane Doe",
    grade="IP",
    signature_image_url="file:///signatures/jane.png",
)
TXN = TransactionRecord(
    id="t1",
    case_id="case-1",
    transaction_type="payment",
    account_code="E500",
)


def test_valid_transaction_returns_bank_code() -> None:
    """A complete transaction should resolve its bank account code."""
    assert validate_for_posting(TXN, CASE, CHART, USER) == "BANK01"


@pytest.mark.parametrize(
    ("txn", "case", "user", "message"),
    [
        (TXN, CASE, None, "logged in"),
        (TXN, CASE, CashieringUser(email="a@b.c", grade="Manager"), "IP grade"),
        (
            TransactionRecord(id="t1", case_id="case-1"),
            CASE,
            USER,
            "missing an Account Code",
        ),
        (TXN, None, USER, "parent case"),
        (
            TransactionRecord(
                id="t1",
                case_id="case-1",
                account_code="E500",
                target_account="secondary",
            ),
            CASE,
            USER,
            "doesn't have an account code",
        ),
        (
            TransactionRecord(id="t1", case_id="case-1", account_code="X1"),
            CASE,
            USER,
            "not a valid code",
        ),
        (
            TXN,
            CASE,
            CashieringUser(email="ip@example.com", grade="IP"),
            "upload your signature",
        ),
    ],
)
def test_posting_validation_failures(txn, case, user, message) -> None:
    """Each failed check should raise a readable message."""
    with pytest.raises(PostingValidationError, match=message):
        validate_for_posting(txn, case, CHART, user)


def test_edit_validation_returns_gross() -> None:
    """A complete edit should return net plus VAT."""
    edit = TransactionEdit(
        account_code="E500",
        description="Agents",
        payee_name="Agent Ltd",
        transaction_date="2025-05-19",
        net_amount="1,000.00",
        vat_amount="200",
    )

    assert validate_transaction_edit(edit, CHART) == Decimal("1200.00")


def test_edit_validation_requires_details_for_approved_transactions() -> None:
    """Approved edits need description, payee, date and a positive gross."""
    missing = TransactionEdit(account_code="E500", net_amount="10")
    zero = TransactionEdit(
        account_code="E500",
        description="Agents",
        payee_name="Agent Ltd",
        transaction_date="2025-05-19",
    )

    with pytest.raises(PostingValidationError, match="are required"):
        validate_transaction_edit(missing, CHART)
    with pytest.raises(PostingValidationError, match="positive"):
        validate_transaction_edit(zero, CHART)


def test_pending_edit_only_checks_account_code_and_numbers() -> None:
    """Pending edits may leave details blank."""
    edit = TransactionEdit(account_code="E500")

    assert validate_transaction_edit(
        edit, CHART, require_details=False
    ) == Decimal("0")
    with pytest.raises(PostingValidationError, match="not valid"):
        validate_transaction_edit(
            TransactionEdit(account_code="X1"), CHART, require_details=False
        )
    with pytest.raises(PostingValidationError, match="must be numbers"):
        validate_transaction_edit(
            TransactionEdit(account_code="E500", net_amount="ten"),
            CHART,
            require_details=False,
        )
    with pytest.raises(PostingValidationError, match="Account code"):
        validate_transaction_edit(
            TransactionEdit(account_code=" "), CHART, require_details=False
        )
