"""Use cases editing approved and pending transactions."""

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from src.application.ports.ledger import LedgerPostingPort
from src.application.use_cases.update_case_funds import (
    UpdateCaseFundsUseCase,
)
from src.domain.errors import (
    PostingValidationError,
    TransactionNotFoundError,
)
from src.domain.models import (
    CashieringUser,
    TransactionEdit,
    TransactionRecord,
)
from src.domain.services.ledger import double_entry_request
from src.domain.services.validation import validate_transaction_edit
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from src.utils.decimal_utils import coerce_decimal


class EditApprovedTransactionUseCase:
    """Change an approved transaction and repost its double entry."""

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        writer: CashieringWriterPort,
        ledger: LedgerPostingPort,
        funds_updater: UpdateCaseFundsUseCase,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._repository = repository
        self._writer = writer
        self._ledger = ledger
        self._funds_updater = funds_updater
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(
        self,
        transaction_id: str,
        edit: TransactionEdit,
        user: CashieringUser | None = None,
    ) -> TransactionRecord:
        """Apply ``edit`` and repost the transaction.

        Existing entries are deleted, the transaction is updated, new
        entries are posted and the case funds refreshed, in that order.

        Args:
            transaction_id: Approved transaction to change.
            edit: New field values.
            user: User making the change, for the usage log.

        Returns:
            TransactionRecord: Updated transaction.

        Raises:
            TransactionNotFoundError: If the transaction does not exist.
            PostingValidationError: If the edit is invalid or the case or
                its bank account code is missing.
            LedgerPostingError: If the new entries cannot be posted.
        """
        original = self._repository.fetch_transaction(transaction_id)
        if original is None:
            raise TransactionNotFoundError(
                "Original transaction not found. Cannot update."
            )
        case = self._repository.fetch_case(original.case_id)
        if case is None:
            raise PostingValidationError(
                "Case associated with the transaction not found."
            )
        chart = self._repository.fetch_chart_of_accounts()
        gross = validate_transaction_edit(edit, chart)
        bank_code = case.bank_account_code(original.resolved_target_account)
        if not bank_code:
            raise PostingValidationError(
                "The associated bank account does not have a valid account "
                "code. Cannot create accounting entries."
            )

        for entry in self._repository.fetch_entries_for_transaction(
            transaction_id
        ):
            self._writer.delete_accounting_entry(entry.id)

        updated = self._writer.update_transaction(
            transaction_id,
            {
                "description": edit.description,
                "payee_name": edit.payee_name,
                "net_amount": coerce_decimal(edit.net_amount),
                "vat_amount": coerce_decimal(edit.vat_amount),
                "amount": gross,
                "transaction_date": edit.transaction_date,
                "invoice_number": edit.invoice_number,
                "account_code": edit.account_code,
            },
        )
        self._ledger.post_double_entry(
            double_entry_request(updated, bank_code)
        )
        self._funds_updater.execute(original.case_id)

        actor = user.email if user else "unknown user"
        self._usage_logger.info(
            f"{actor} edited approved transaction {transaction_id}"
        )
        return updated


class EditPendingTransactionUseCase:
    """Change a transaction that has not been posted yet."""

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        writer: CashieringWriterPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._repository = repository
        self._writer = writer
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(
        self,
        transaction_id: str,
        edit: TransactionEdit,
        user: CashieringUser | None = None,
    ) -> TransactionRecord:
        """Save ``edit`` and return the patched record.

        Raises:
            PostingValidationError: If the account code is missing or
                unknown, or an amount is not a number.
            TransactionNotFoundError: If the transaction does not exist.
        """
        chart = self._repository.fetch_chart_of_accounts()
        gross = validate_transaction_edit(edit, chart, require_details=False)
        updated = self._writer.update_transaction(
            transaction_id,
            {
                "account_code": edit.account_code,
                "description": edit.description,
                "payee_name": edit.payee_name,
                "invoice_number": edit.invoice_number,
                "net_amount": coerce_decimal(edit.net_amount),
                "vat_amount": coerce_decimal(edit.vat_amount),
                "amount": gross,
            },
        )
        actor = user.email if user else "unknown user"
        self._usage_logger.info(
            f"{actor} edited pending transaction {transaction_id}"
        )
        return updated


__all__ = ["EditApprovedTransactionUseCase", "EditPendingTransactionUseCase"]
