"""Use case deleting a transaction with its entries and voucher."""

from dataclasses import dataclass

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from src.application.ports.documents import DocumentStorePort
from src.application.use_cases.update_case_funds import (
    UpdateCaseFundsUseCase,
)
from src.domain.errors import TransactionNotFoundError
from src.domain.models import CaseFunds, CashieringUser
from src.domain.services.vouchers import matches_voucher
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


@dataclass(frozen=True)
class DeleteTransactionResult:
    """Outcome of a transaction deletion.

    Attributes:
        transaction_id: Deleted transaction.
        deleted_entries: Number of accounting entries removed.
        deleted_documents: Number of voucher documents removed.
        funds: Refreshed case funds, or None if the write-back failed.
    """

    transaction_id: str
    deleted_entries: int
    deleted_documents: int
    funds: CaseFunds | None


class DeleteTransactionUseCase:
    """Delete a transaction and everything posted for it."""

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        writer: CashieringWriterPort,
        documents: DocumentStorePort,
        funds_updater: UpdateCaseFundsUseCase,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._repository = repository
        self._writer = writer
        self._documents = documents
        self._funds_updater = funds_updater
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(
        self,
        transaction_id: str,
        user: CashieringUser | None = None,
    ) -> DeleteTransactionResult:
        """Delete entries, voucher documents, the transaction, then
        refresh the case funds.

        Args:
            transaction_id: Transaction to delete.
            user: User requesting the deletion, for the usage log.

        Returns:
            DeleteTransactionResult: Counts of removed records.

        Raises:
            TransactionNotFoundError: If the transaction does not exist.
        """
        txn = self._repository.fetch_transaction(transaction_id)
        if txn is None:
            raise TransactionNotFoundError(
                f"Transaction {transaction_id} not found"
            )

        entries = self._repository.fetch_entries_for_transaction(
            transaction_id
        )
        if not entries:
            self._logger.warning(
                f"No accounting entries found for transaction "
                f"{transaction_id}"
            )
        for entry in entries:
            self._writer.delete_accounting_entry(entry.id)

        vouchers = [
            document
            for document in self._documents.fetch_case_documents(txn.case_id)
            if matches_voucher(document, txn)
        ]
        for document in vouchers:
            self._documents.delete_document(document.id)

        self._writer.delete_transaction(transaction_id)
        funds = self._funds_updater.execute(txn.case_id)

        self._logger.info(
            f"Deleted transaction {transaction_id} with {len(entries)} "
            f"entries and {len(vouchers)} vouchers"
        )
        actor = user.email if user else "unknown user"
        self._usage_logger.info(
            f"{actor} deleted transaction {transaction_id} "
            f"on case {txn.case_id}"
        )
        return DeleteTransactionResult(
            transaction_id=transaction_id,
            deleted_entries=len(entries),
            deleted_documents=len(vouchers),
            funds=funds,
        )


__all__ = ["DeleteTransactionResult", "DeleteTransactionUseCase"]
