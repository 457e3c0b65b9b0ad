"""Tests for double-entry line construction."""

from decimal import Decimal

import pytest

from src.domain.errors import LedgerPostingError
from src.domain.models import (
    ChartOfAccountRecord,
    DoubleEntryRequest,
    TransactionRecord,
)
from src.domain.services.ledger import (
    VAT_ACCOUNTS,
    build_double_entry_lines,
    double_entry_request,
)


CHART = [
    ChartOfAccountRecord("BANK01", "Cash at Bank", "Assets", "Bank"),
    ChartOfAccountRecord("R400", "Book debts", "Income", "Asset Realisations"),
    ChartOfAccountRecord("E500", "Agents fees", "Expense", "Costs"),
    *VAT_ACCOUNTS,
]


def _request(**kwargs) -> DoubleEntryRequest:
    values = {
        "case_id": "case-1",
        "transaction_id": "t1",
        "transaction_date": "2025-05-19",
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


def _summary(lines):
    return [
        (line.account_code, line.debit_amount, line.credit_amount)
        for line in lines
    ]


def test_receipt_with_vat_debits_bank_and_credits_net_and_vat() -> None:
    """A receipt should balance across bank, income and VAT payable."""
    lines = build_double_entry_lines(_request(), CHART)

    assert _summary(lines) == [
        ("BANK01", Decimal("120"), Decimal("0")),
        ("R400", Decimal("0"), Decimal("100")),
        ("VAT002", Decimal("0"), Decimal("20")),
    ]
    assert {line.journal_type for line in lines} == {"receipts"}
    assert lines[0].description == "Receipt: Sale of stock"
    assert lines[2].description == "VAT on receipt: Sale of stock"


def test_payment_with_vat_credits_bank_and_debits_net_and_vat() -> None:
    """A payment should mirror the receipt using VAT receivable."""
    lines = build_double_entry_lines(
        _request(transaction_type="payment", account_code="E500"),
        CHART,
    )

    assert _summary(lines) == [
        ("BANK01", Decimal("0"), Decimal("120")),
        ("E500", Decimal("100"), Decimal("0")),
        ("VAT001", Decimal("20"), Decimal("0")),
    ]
    assert {line.journal_type for line in lines} == {"payments"}


def test_zero_vat_posts_gross_to_the_account() -> None:
    """Without VAT only two lines are posted, both for the gross amount."""
    lines = build_double_entry_lines(
        _request(
            net_amount=Decimal("0"),
            vat_amount=Decimal("0"),
            gross_amount=Decimal("75"),
        ),
        CHART,
    )

    assert _summary(lines) == [
        ("BANK01", Decimal("75"), Decimal("0")),
        ("R400", Decimal("0"), Decimal("75")),
    ]


def test_lines_always_balance() -> None:
    """Debits and credits should net to zero for both directions."""
    for kind, code in (("receipt", "R400"), ("payment", "E500")):
        lines = build_double_entry_lines(
            _request(transaction_type=kind, account_code=code), CHART
        )
        debits = sum(line.debit_amount for line in lines)
        credits = sum(line.credit_amount for line in lines)
        assert debits == credits


def test_missing_parameters_are_reported_together() -> None:
    """Every missing parameter should be named in the error."""
    with pytest.raises(LedgerPostingError) as excinfo:
        build_double_entry_lines(
            _request(bank_account_code="", transaction_date=None), CHART
        )

    assert "bank_account_code" in str(excinfo.value)
    assert "transaction_date" in str(excinfo.value)


def test_unknown_codes_and_types_are_rejected() -> None:
    """Unknown codes and transaction types should not produce lines."""
    with pytest.raises(LedgerPostingError, match="Account code X999"):
        build_double_entry_lines(_request(account_code="X999"), CHART)
    with pytest.raises(LedgerPostingError, match="Bank account code"):
        build_double_entry_lines(_request(bank_account_code="B9"), CHART)
    with pytest.raises(LedgerPostingError, match="Unsupported transaction"):
        build_double_entry_lines(_request(transaction_type="transfer"), CHART)


def test_missing_vat_account_is_rejected() -> None:
    """VAT lines need the VAT account in the chart."""
    chart = [
        account
        for account in CHART
        if account.account_code not in ("VAT001", "VAT002")
    ]

    with pytest.raises(LedgerPostingError, match="VAT002"):
        build_double_entry_lines(_request(), chart)


def test_double_entry_request_coerces_amounts_and_defaults_reference() -> None:
    """Stored amounts should be coerced and the reference defaulted."""
    txn = TransactionRecord(
        id="t1",
        case_id="case-1",
        transaction_type="payment",
        amount="1,200.00",
        net_amount="1000",
        vat_amount="200",
        account_code="E500",
        transaction_date="2025-05-19",
        description="Agents",
    )

    request = double_entry_request(txn, "BANK01")

    assert request.gross_amount == Decimal("1200.00")
    assert request.net_amount == Decimal("1000")
    assert request.vat_amount == Decimal("200")
    assert request.bank_account_code == "BANK01"
    assert request.reference == "t1"
