"""Use case computing case-level cashiering figures."""

from src.application.use_cases.load_snapshot import CashieringSnapshot
from src.domain.constants import VAT_CONTROL_CODE
from src.domain.models import CaseAggregate
from src.domain.services.aggregation import (
    build_case_aggregates,
    search_case_aggregates,
)
from src.infrastructure.logging.logger import get_app_logger


class GetCaseAggregatesUseCase:
    """Compute a ``CaseAggregate`` for every case in a snapshot."""

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
    ) -> list[CaseAggregate]:
        """Return aggregates in case order, optionally filtered.

        Args:
            snapshot: Loaded cashiering collections.
            search: Optional term matched against company, reference,
                administrator and bank names.

        Returns:
            list[CaseAggregate]: One aggregate per matching case.
        """
        aggregates = build_case_aggregates(
            snapshot.cases,
            snapshot.transactions,
            snapshot.entries,
            snapshot.chart,
            self._logger,
            vat_control_code=self._vat_control_code,
        )
        return search_case_aggregates(aggregates, search)


__all__ = ["GetCaseAggregatesUseCase"]
