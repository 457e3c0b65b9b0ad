"""Domain models package."""

from .cases import BankDetails, BondIncrease, CaseRecord, CashieringUser
from .cashiering import (
    BankAccountRow,
    BondingOverview,
    CaseAggregate,
    CaseFunds,
    CaseTypeTotals,
)
from .ledger import (
    AccountingEntryRecord,
    ChartOfAccountRecord,
    DoubleEntryRequest,
    LedgerLine,
    TransactionEdit,
    TransactionRecord,
    VoucherDocument,
)

__all__ = [
    "BankDetails",
    "BondIncrease",
    "CaseRecord",
    "CashieringUser",
    "BankAccountRow",
    "BondingOverview",
    "CaseAggregate",
    "CaseFunds",
    "CaseTypeTotals",
    "AccountingEntryRecord",
    "ChartOfAccountRecord",
    "DoubleEntryRequest",
    "LedgerLine",
    "TransactionEdit",
    "TransactionRecord",
    "VoucherDocument",
]
