"""Use case producing the per-bank-account cashiering table."""

from collections.abc import Sequence

from src.application.use_cases.get_case_aggregates import (
    GetCaseAggregatesUseCase,
)
from src.application.use_cases.load_snapshot import CashieringSnapshot
from src.domain.constants import VAT_CONTROL_CODE
from src.domain.models import BankAccountRow, CaseAggregate
from src.domain.services.bank_rows import flatten_all
from src.infrastructure.logging.logger import get_app_logger


class GetBankAccountRowsUseCase:
    """Flatten case aggregates into rows sorted by company name."""

    def __init__(
        self,
        logger=None,
        vat_control_code: str = VAT_CONTROL_CODE,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            vat_control_code: Ledger code of the VAT control account.
        """
        self._logger = logger or get_app_logger()
        self._vat_control_code = vat_control_code

    def execute(
        self,
        snapshot: CashieringSnapshot,
        search: str | None = None,
        aggregates: Sequence[CaseAggregate] | None = None,
    ) -> list[BankAccountRow]:
        """Return bank-account rows for the snapshot.

        Args:
            snapshot: Loaded cashiering collections.
            search: Optional case search term.
            aggregates: Precomputed aggregates; computed from the snapshot
                when omitted.

        Returns:
            list[BankAccountRow]: Rows sorted by company name.
        """
        if aggregates is None:
            aggregates = GetCaseAggregatesUseCase(
                logger=self._logger,
                vat_control_code=self._vat_control_code,
            ).execute(snapshot, search=search)
        rows = flatten_all(
            aggregates,
            snapshot.transactions,
            snapshot.chart,
            snapshot.entries,
            self._logger,
            vat_control_code=self._vat_control_code,
        )
        self._logger.info(f"Built {len(rows)} bank account rows")
        return rows


__all__ = ["GetBankAccountRowsUseCase"]
