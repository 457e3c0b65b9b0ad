"""Use case summarising funds held and distributed per case type."""

from src.application.use_cases.load_snapshot import CashieringSnapshot
from src.domain.models import CaseTypeTotals
from src.domain.services.summary import summary_by_case_type
from src.infrastructure.logging.logger import get_app_logger


class GetCaseTypeSummaryUseCase:
    """Roll case funds up by case type."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def execute(
        self,
        snapshot: CashieringSnapshot,
    ) -> dict[str, CaseTypeTotals]:
        """Return totals keyed by case type, sorted by type name."""
        summary = summary_by_case_type(
            snapshot.cases,
            snapshot.transactions,
            snapshot.chart,
            self._logger,
        )
        return dict(sorted(summary.items()))


__all__ = ["GetCaseTypeSummaryUseCase"]
