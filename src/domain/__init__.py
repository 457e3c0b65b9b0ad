"""Domain package for cashiering rules and core models."""

from .errors import (
    ApprovalStepError,
    CashieringError,
    LedgerPostingError,
    PostingValidationError,
    TransactionNotFoundError,
)
from .models import (
    AccountingEntryRecord,
    BankAccountRow,
    BankDetails,
    BondIncrease,
    BondingOverview,
    CaseAggregate,
    CaseFunds,
    CaseRecord,
    CaseTypeTotals,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionRecord,
)
from .policies import is_bonding_excluded
from .services import (
    build_case_aggregates,
    compute_case_funds,
    flatten_all,
    split_bonding_cases,
    summary_by_case_type,
)

__all__ = [
    "ApprovalStepError",
    "CashieringError",
    "LedgerPostingError",
    "PostingValidationError",
    "TransactionNotFoundError",
    "AccountingEntryRecord",
    "BankAccountRow",
    "BankDetails",
    "BondIncrease",
    "BondingOverview",
    "CaseAggregate",
    "CaseFunds",
    "CaseRecord",
    "CaseTypeTotals",
    "CashieringUser",
    "ChartOfAccountRecord",
    "TransactionRecord",
    "is_bonding_excluded",
    "build_case_aggregates",
    "compute_case_funds",
    "flatten_all",
    "split_bonding_cases",
    "summary_by_case_type",
]
