"""Use case writing the denormalised funds snapshot back onto cases."""

from collections.abc import Iterable

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from src.domain.models import CaseFunds
from src.domain.services.aggregation import compute_case_funds
from src.domain.services.classification import build_chart_lookup
from src.infrastructure.logging.logger import get_app_logger


class UpdateCaseFundsUseCase:
    """Recompute and persist total funds held and distributed.

    Write-back is best effort: a failure is logged and reported as
    ``None`` so the mutation that triggered it is not undone.
    """

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        writer: CashieringWriterPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing read access to transactions.
            writer: Port persisting the funds snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._writer = writer
        self._logger = logger or get_app_logger()

    def execute(self, case_id: str) -> CaseFunds | None:
        """Recompute the funds of one case from the latest transactions.

        Args:
            case_id: Case to update.

        Returns:
            CaseFunds | None: Persisted figures, or None on failure.
        """
        results = self.execute_many([case_id])
        return results.get(case_id)

    def execute_many(
        self,
        case_ids: Iterable[str],
    ) -> dict[str, CaseFunds | None]:
        """Recompute the funds of several cases with one read.

        Args:
            case_ids: Cases to update.

        Returns:
            dict[str, CaseFunds | None]: Result per case id.
        """
        ids = list(case_ids)
        try:
            transactions = self._repository.fetch_transactions()
            chart = build_chart_lookup(
                self._repository.fetch_chart_of_accounts()
            )
        except Exception as exc:
            self._logger.error(
                f"Could not read data to update case funds: {exc}"
            )
            return {case_id: None for case_id in ids}

        results: dict[str, CaseFunds | None] = {}
        for case_id in ids:
            try:
                funds = compute_case_funds(
                    case_id,
                    transactions,
                    chart,
                    self._logger,
                )
                self._writer.update_case_funds(funds)
            except Exception as exc:
                self._logger.error(
                    f"Failed to update funds for case {case_id}: {exc}"
                )
                results[case_id] = None
                continue
            self._logger.info(
                f"Updated case {case_id} funds: "
                f"held={funds.total_funds_held}, "
                f"distributed={funds.total_funds_distributed}"
            )
            results[case_id] = funds
        return results


__all__ = ["UpdateCaseFundsUseCase"]
