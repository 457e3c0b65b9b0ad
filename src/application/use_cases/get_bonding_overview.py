"""Use case building the bonding table."""

from collections.abc import Sequence

from src.application.use_cases.get_case_aggregates import (
    GetCaseAggregatesUseCase,
)
from src.application.use_cases.load_snapshot import CashieringSnapshot
from src.domain.constants import VAT_CONTROL_CODE
from src.domain.models import BondingOverview, CaseAggregate
from src.domain.services.bonding import split_bonding_cases
from src.infrastructure.logging.logger import get_app_logger


class GetBondingOverviewUseCase:
    """Split cases between the bonding table and excluded case types."""

    def __init__(
        self,
        logger=None,
        vat_control_code: str = VAT_CONTROL_CODE,
    ) -> None:
        self._logger = logger or get_app_logger()
        self._vat_control_code = vat_control_code

    def execute(
        self,
        snapshot: CashieringSnapshot,
        search: str | None = None,
        sort_by: str = "appointment_date",
        descending: bool = True,
        aggregates: Sequence[CaseAggregate] | None = None,
    ) -> BondingOverview:
        """Return the bonding overview.

        Args:
            snapshot: Loaded cashiering collections.
            search: Optional term over company, reference and case type.
            sort_by: appointment_date, case_type or closure_date.
            descending: Sort direction for bonding cases.
            aggregates: Precomputed aggregates; computed from the snapshot
                when omitted.

        Returns:
            BondingOverview: Bonding and excluded cases.

        Raises:
            ValueError: If sort_by is not supported.
        """
        if aggregates is None:
            aggregates = GetCaseAggregatesUseCase(
                logger=self._logger,
                vat_control_code=self._vat_control_code,
            ).execute(snapshot)
        overview = split_bonding_cases(
            aggregates,
            term=search,
            sort_by=sort_by,
            descending=descending,
        )
        underbonded = sum(
            1 for item in overview.bonding_cases if item.is_underbonded
        )
        if underbonded:
            self._logger.warning(f"{underbonded} cases are underbonded")
        return overview


__all__ = ["GetBondingOverviewUseCase"]
