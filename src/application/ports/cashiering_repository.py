"""Ports for reading and writing cashiering records."""

from collections.abc import Mapping
from typing import Any, Protocol

from src.domain.models import (
    AccountingEntryRecord,
    CaseFunds,
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionRecord,
)


class CashieringRepositoryPort(Protocol):
    """Port exposing read access to cases, transactions and the ledger."""

    def fetch_cases(self, limit: int | None = None) -> list[CaseRecord]:
        """Return cases, most recently created first."""

    def fetch_case(self, case_id: str) -> CaseRecord | None:
        """Return one case, or None when it does not exist."""

    def fetch_transactions(self) -> list[TransactionRecord]:
        """Return every transaction."""

    def fetch_accounting_entries(self) -> list[AccountingEntryRecord]:
        """Return every accounting entry."""

    def fetch_chart_of_accounts(self) -> list[ChartOfAccountRecord]:
        """Return the chart of accounts."""

    def fetch_users(self) -> list[CashieringUser]:
        """Return users allowed on cashiering screens."""

    def fetch_transaction(
        self,
        transaction_id: str,
    ) -> TransactionRecord | None:
        """Return one transaction, or None when it does not exist."""

    def fetch_entries_for_transaction(
        self,
        transaction_id: str,
    ) -> list[AccountingEntryRecord]:
        """Return the accounting entries posted for a transaction."""


class CashieringWriterPort(Protocol):
    """Port exposing write access to cases and transactions."""

    def update_case_funds(self, funds: CaseFunds) -> None:
        """Persist the denormalised funds snapshot of a case."""

    def update_transaction(
        self,
        transaction_id: str,
        changes: Mapping[str, Any],
    ) -> TransactionRecord:
        """Apply field changes to a transaction and return the result.

        Raises:
            TransactionNotFoundError: If the transaction does not exist.
        """

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""

    def delete_accounting_entry(self, entry_id: str) -> None:
        """Delete one accounting entry."""


__all__ = ["CashieringRepositoryPort", "CashieringWriterPort"]
