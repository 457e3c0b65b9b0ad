"""Application use cases package."""

from .approve_transaction import APPROVAL_STEPS, ApproveTransactionUseCase
from .delete_transaction import (
    DeleteTransactionResult,
    DeleteTransactionUseCase,
)
from .edit_transaction import (
    EditApprovedTransactionUseCase,
    EditPendingTransactionUseCase,
)
from .get_bank_account_rows import GetBankAccountRowsUseCase
from .get_bonding_overview import GetBondingOverviewUseCase
from .get_case_aggregates import GetCaseAggregatesUseCase
from .get_case_type_summary import GetCaseTypeSummaryUseCase
from .load_snapshot import CashieringSnapshot, LoadCashieringSnapshotUseCase
from .reject_transaction import RejectTransactionUseCase
from .update_case_funds import UpdateCaseFundsUseCase

__all__ = [
    "APPROVAL_STEPS",
    "ApproveTransactionUseCase",
    "DeleteTransactionResult",
    "DeleteTransactionUseCase",
    "EditApprovedTransactionUseCase",
    "EditPendingTransactionUseCase",
    "GetBankAccountRowsUseCase",
    "GetBondingOverviewUseCase",
    "GetCaseAggregatesUseCase",
    "GetCaseTypeSummaryUseCase",
    "CashieringSnapshot",
    "LoadCashieringSnapshotUseCase",
    "RejectTransactionUseCase",
    "UpdateCaseFundsUseCase",
]
