"""Use case rejecting a pending transaction."""

from src.application.ports.cashiering_repository import CashieringWriterPort
from src.domain.constants import STATUS_REJECTED
from src.domain.models import CashieringUser, TransactionRecord
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class RejectTransactionUseCase:
    """Mark a transaction as rejected."""

    def __init__(
        self,
        writer: CashieringWriterPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._writer = writer
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(
        self,
        transaction_id: str,
        user: CashieringUser | None = None,
    ) -> TransactionRecord:
        """Reject ``transaction_id`` and return the updated record.

        Raises:
            TransactionNotFoundError: If the transaction does not exist.
        """
        updated = self._writer.update_transaction(
            transaction_id,
            {"status": STATUS_REJECTED},
        )
        actor = user.email if user else "unknown user"
        self._logger.info(f"Transaction {transaction_id} rejected")
        self._usage_logger.info(
            f"{actor} rejected transaction {transaction_id}"
        )
        return updated


__all__ = ["RejectTransactionUseCase"]
