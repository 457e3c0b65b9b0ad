"""Use case loading the cashiering snapshot every view is derived from."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
)
from src.domain.models import (
    AccountingEntryRecord,
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_CASE_LIMIT = 200


@dataclass(frozen=True)
class CashieringSnapshot:
    """Collections read from storage for one dashboard render.

    Attributes:
        cases: Cases, most recently created first.
        transactions: Every transaction.
        entries: Every accounting entry.
        chart: Chart of accounts.
        users: Cashiering users.
        load_errors: Collection name mapped to the failure message for
            each collection that could not be read.
    """

    cases: list[CaseRecord] = field(default_factory=list)
    transactions: list[TransactionRecord] = field(default_factory=list)
    entries: list[AccountingEntryRecord] = field(default_factory=list)
    chart: list[ChartOfAccountRecord] = field(default_factory=list)
    users: list[CashieringUser] = field(default_factory=list)
    load_errors: dict[str, str] = field(default_factory=dict)

    @property
    def has_blocking_error(self) -> bool:
        """Return True when no case could be loaded because of a failure."""
        return not self.cases and "cases" in self.load_errors

    def find_case(self, case_id: str) -> CaseRecord | None:
        """Return the case with ``case_id`` from the snapshot."""
        for case in self.cases:
            if case.id == case_id:
                return case
        return None

    def find_user(self, email: str) -> CashieringUser | None:
        """Return the user with ``email`` from the snapshot."""
        for user in self.users:
            if user.email == email:
                return user
        return None


class LoadCashieringSnapshotUseCase:
    """Read every collection the cashiering views need.

    Each collection is read independently: a failing read leaves that
    collection empty and is recorded in ``load_errors`` so the remaining
    views still render.
    """

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        logger=None,
        case_limit: int = DEFAULT_CASE_LIMIT,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing read access to cashiering records.
            logger: Optional logger compatible with logging.Logger-like API.
            case_limit: Maximum number of cases to read.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._case_limit = case_limit

    def execute(self) -> CashieringSnapshot:
        """Return the latest snapshot.

        Returns:
            CashieringSnapshot: Loaded collections and any load errors.
        """
        errors: dict[str, str] = {}
        cases = self._load(
            "cases",
            lambda: self._repository.fetch_cases(limit=self._case_limit),
            errors,
        )
        transactions = self._load(
            "transactions",
            self._repository.fetch_transactions,
            errors,
        )
        chart = self._load(
            "chart_of_accounts",
            self._repository.fetch_chart_of_accounts,
            errors,
        )
        entries = self._load(
            "accounting_entries",
            self._repository.fetch_accounting_entries,
            errors,
        )
        users = self._load("users", self._repository.fetch_users, errors)

        self._logger.info(
            f"Loaded cashiering snapshot: cases={len(cases)}, "
            f"transactions={len(transactions)}, entries={len(entries)}, "
            f"accounts={len(chart)}, users={len(users)}"
        )
        return CashieringSnapshot(
            cases=cases,
            transactions=transactions,
            entries=entries,
            chart=chart,
            users=users,
            load_errors=errors,
        )

    def _load(
        self,
        name: str,
        fetch: Callable[[], list[Any]],
        errors: dict[str, str],
    ) -> list[Any]:
        try:
            return list(fetch())
        except Exception as exc:
            self._logger.error(f"Failed to load {name}: {exc}")
            errors[name] = str(exc) or exc.__class__.__name__
            return []


__all__ = [
    "CashieringSnapshot",
    "LoadCashieringSnapshotUseCase",
    "DEFAULT_CASE_LIMIT",
]
