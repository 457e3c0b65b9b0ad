"""Double-entry lines for receipts and payments."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import (
    PAYMENT,
    RECEIPT,
    VAT_PAYABLE_CODE,
    VAT_RECEIVABLE_CODE,
)
from src.domain.errors import LedgerPostingError
from src.domain.models import (
    ChartOfAccountRecord,
    DoubleEntryRequest,
    LedgerLine,
    TransactionRecord,
)
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
)
from src.utils.decimal_utils import coerce_decimal


VAT_ACCOUNTS = (
    ChartOfAccountRecord(
        account_code=VAT_RECEIVABLE_CODE,
        account_name="VAT Receivable",
        account_type="Assets",
        account_group="VAT",
    ),
    ChartOfAccountRecord(
        account_code=VAT_PAYABLE_CODE,
        account_name="VAT Payable",
        account_type="Liabilities",
        account_group="VAT",
    ),
)


def build_double_entry_lines(
    request: DoubleEntryRequest,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> list[LedgerLine]:
    """Return the ledger lines posting a transaction.

    A receipt debits the bank with the gross amount, credits the account
    with the net amount (gross when there is no VAT) and credits VAT
    payable. A payment mirrors it, debiting VAT receivable.

    Args:
        request: Transaction amounts and codes to post.
        chart: Chart-of-accounts snapshot or lookup.

    Returns:
        list[LedgerLine]: Two lines, or three when VAT is positive.

    Raises:
        LedgerPostingError: If required values are missing or a code is
            not in the chart of accounts.
    """
    missing = [
        name
        for name, value in (
            ("case_id", request.case_id),
            ("transaction_id", request.transaction_id),
            ("account_code", request.account_code),
            ("bank_account_code", request.bank_account_code),
            ("transaction_date", request.transaction_date),
        )
        if not value
    ]
    if missing:
        raise LedgerPostingError(
            f"Missing required parameters: {', '.join(missing)}"
        )
    if request.transaction_type not in (RECEIPT, PAYMENT):
        raise LedgerPostingError(
            f"Unsupported transaction type: {request.transaction_type}"
        )

    lookup = build_chart_lookup(chart)
    account = _require(lookup, request.account_code, "Account code")
    bank = _require(lookup, request.bank_account_code, "Bank account code")

    vat = request.vat_amount
    main_amount = request.net_amount if vat > 0 else request.gross_amount
    zero = Decimal("0")

    if request.transaction_type == RECEIPT:
        journal = "receipts"
        label = f"Receipt: {request.description}"
        lines = [
            _line(bank, label, request.gross_amount, zero, journal),
            _line(account, label, zero, main_amount, journal),
        ]
        if vat > 0:
            vat_account = _require(lookup, VAT_PAYABLE_CODE, "VAT account")
            lines.append(
                _line(
                    vat_account,
                    f"VAT on receipt: {request.description}",
                    zero,
                    vat,
                    journal,
                )
            )
        return lines

    journal = "payments"
    label = f"Payment: {request.description}"
    lines = [
        _line(bank, label, zero, request.gross_amount, journal),
        _line(account, label, main_amount, zero, journal),
    ]
    if vat > 0:
        vat_account = _require(lookup, VAT_RECEIVABLE_CODE, "VAT account")
        lines.append(
            _line(
                vat_account,
                f"VAT on payment: {request.description}",
                vat,
                zero,
                journal,
            )
        )
    return lines


def double_entry_request(
    txn: TransactionRecord,
    bank_account_code: str,
) -> DoubleEntryRequest:
    """Return the posting request for a transaction.

    Raises:
        decimal.InvalidOperation: If a stored amount is not a number.
        TypeError: If a stored amount has an unsupported type.
    """
    return DoubleEntryRequest(
        case_id=txn.case_id,
        transaction_id=txn.id,
        transaction_date=txn.transaction_date,
        description=txn.description,
        net_amount=coerce_decimal(txn.net_amount),
        vat_amount=coerce_decimal(txn.vat_amount),
        gross_amount=coerce_decimal(txn.amount),
        transaction_type=txn.transaction_type,
        account_code=txn.account_code,
        bank_account_code=bank_account_code,
        reference=txn.reference or txn.id,
    )


def _require(
    lookup: ChartLookup,
    code: str,
    label: str,
) -> ChartOfAccountRecord:
    account = lookup.get(code)
    if account is None:
        raise LedgerPostingError(
            f"{label} {code} not found in chart of accounts"
        )
    return account


def _line(
    account: ChartOfAccountRecord,
    description: str,
    debit: Decimal,
    credit: Decimal,
    journal_type: str,
) -> LedgerLine:
    return LedgerLine(
        account_code=account.account_code,
        account_name=account.account_name,
        account_type=account.account_type,
        account_group=account.account_group,
        description=description,
        debit_amount=debit,
        credit_amount=credit,
        journal_type=journal_type,
    )


__all__ = [
    "VAT_ACCOUNTS",
    "build_double_entry_lines",
    "double_entry_request",
]
