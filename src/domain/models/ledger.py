"""Domain models for transactions, ledger entries and accounts."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class TransactionRecord:
    """Receipt or payment recorded against a case.

    Amount fields hold whatever storage delivered; folds coerce them one
    record at a time so a malformed value only affects its own record.
    """

    id: str
    case_id: str
    transaction_type: str = ""
    account_type: str = ""
    target_account: str = ""
    status: str = ""
    amount: Decimal | str | None = None
    net_amount: Decimal | str | None = None
    vat_amount: Decimal | str | None = None
    account_code: str = ""
    bank_request_date: date | str | None = None
    transaction_date: date | str | None = None
    description: str = ""
    payee_name: str = ""
    invoice_number: str = ""
    reference: str = ""
    approver_name: str = ""
    approver_signed_by: str = ""
    approver_signed_date: str = ""
    approver_grade: str = ""

    @property
    def resolved_target_account(self) -> str:
        """Return the target account, defaulting to primary."""
        return (self.target_account or "").strip() or "primary"


@dataclass(frozen=True)
class AccountingEntryRecord:
    """Single debit or credit line of a double entry."""

    id: str
    case_id: str
    transaction_id: str | None
    account_code: str
    debit_amount: Decimal | str | None = None
    credit_amount: Decimal | str | None = None
    entry_date: date | str | None = None
    description: str = ""
    journal_type: str = ""


@dataclass(frozen=True)
class ChartOfAccountRecord:
    """Chart-of-accounts row keyed by account code."""

    account_code: str
    account_name: str = ""
    account_type: str = ""
    account_group: str = ""


@dataclass(frozen=True)
class DoubleEntryRequest:
    """Inputs needed to post a transaction to the ledger."""

    case_id: str
    transaction_id: str
    transaction_date: date | str | None
    description: str
    net_amount: Decimal
    vat_amount: Decimal
    gross_amount: Decimal
    transaction_type: str
    account_code: str
    bank_account_code: str
    reference: str = ""


@dataclass(frozen=True)
class LedgerLine:
    """Debit or credit line produced for a double entry."""

    account_code: str
    account_name: str
    account_type: str
    account_group: str
    description: str
    debit_amount: Decimal
    credit_amount: Decimal
    journal_type: str


@dataclass(frozen=True)
class TransactionEdit:
    """Fields a user may change on an existing transaction.

    Amounts are kept as entered (strings from forms are accepted) and
    coerced during validation.
    """

    account_code: str
    description: str = ""
    payee_name: str = ""
    transaction_date: date | str | None = None
    invoice_number: str = ""
    net_amount: Decimal | str | None = None
    vat_amount: Decimal | str | None = None


@dataclass(frozen=True)
class VoucherDocument:
    """Stored voucher evidencing an approved transaction."""

    id: str
    case_id: str
    doc_type: str
    file_url: str
    raw_text: str = ""


__all__ = [
    "TransactionRecord",
    "AccountingEntryRecord",
    "ChartOfAccountRecord",
    "DoubleEntryRequest",
    "LedgerLine",
    "TransactionEdit",
    "VoucherDocument",
]
