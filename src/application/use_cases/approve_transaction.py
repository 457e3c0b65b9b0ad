"""Use case approving a pending transaction.

Approval runs four writes in order: mark the transaction approved, store
its voucher, post the double entry, then refresh the case funds. The first
failing step stops the sequence and raises ``ApprovalStepError``; steps
already applied stay applied. The funds refresh is best effort: the
updater logs its own failures and approval still succeeds.
"""

from collections.abc import Callable
from datetime import datetime, timezone

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from src.application.ports.documents import DocumentStorePort
from src.application.ports.ledger import LedgerPostingPort
from src.application.use_cases.update_case_funds import (
    UpdateCaseFundsUseCase,
)
from src.domain.constants import STATUS_APPROVED
from src.domain.errors import (
    ApprovalStepError,
    PostingValidationError,
    TransactionNotFoundError,
)
from src.domain.models import CashieringUser, TransactionRecord
from src.domain.services.ledger import double_entry_request
from src.domain.services.validation import validate_for_posting
from src.domain.services.vouchers import (
    render_voucher_html,
    voucher_doc_type,
    voucher_filename,
    voucher_metadata,
)
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


APPROVAL_STEPS = ("approve", "voucher", "ledger", "funds")


class ApproveTransactionUseCase:
    """Approve a transaction and post it to the case ledger."""

    def __init__(
        self,
        repository: CashieringRepositoryPort,
        writer: CashieringWriterPort,
        documents: DocumentStorePort,
        ledger: LedgerPostingPort,
        funds_updater: UpdateCaseFundsUseCase,
        logger=None,
        usage_logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing read access to cashiering records.
            writer: Port updating the transaction.
            documents: Port storing the voucher.
            ledger: Port posting the double entry.
            funds_updater: Use case refreshing case funds.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording user actions.
            clock: Optional callable returning the approval timestamp.
        """
        self._repository = repository
        self._writer = writer
        self._documents = documents
        self._ledger = ledger
        self._funds_updater = funds_updater
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        transaction_id: str,
        user: CashieringUser | None,
    ) -> TransactionRecord:
        """Approve ``transaction_id`` on behalf of ``user``.

        Args:
            transaction_id: Transaction to approve.
            user: Approving user; must hold the posting grade and a
                signature.

        Returns:
            TransactionRecord: The approved transaction.

        Raises:
            TransactionNotFoundError: If the transaction does not exist.
            PostingValidationError: If the transaction cannot be posted.
            ApprovalStepError: If a step fails after validation.
        """
        txn = self._repository.fetch_transaction(transaction_id)
        if txn is None:
            raise TransactionNotFoundError(
                f"Transaction {transaction_id} not found"
            )
        if txn.status == STATUS_APPROVED:
            raise PostingValidationError(
                "This transaction has already been approved."
            )
        case = self._repository.fetch_case(txn.case_id)
        chart = self._repository.fetch_chart_of_accounts()
        bank_code = validate_for_posting(txn, case, chart, user)

        completed: list[str] = []

        def run(step: str, action: Callable[[], object]):
            try:
                result = action()
            except Exception as exc:
                self._logger.error(
                    f"Approval of transaction {transaction_id} failed at "
                    f"step '{step}' after {completed}: {exc}"
                )
                raise ApprovalStepError(
                    step,
                    tuple(completed),
                    f"Failed to approve transaction: {exc}",
                ) from exc
            completed.append(step)
            return result

        approved = run(
            "approve",
            lambda: self._writer.update_transaction(
                transaction_id,
                {
                    "status": STATUS_APPROVED,
                    "approver_signature_url": user.signature_image_url,
                    "approver_signed_by": user.email,
                    "approver_signed_date": self._clock().isoformat(),
                    "approver_name": user.full_name,
                    "approver_grade": user.grade,
                },
            ),
        )
        run(
            "voucher",
            lambda: self._documents.store_voucher(
                case.id,
                voucher_filename(approved, case),
                render_voucher_html(approved, case, chart),
                voucher_doc_type(approved),
                voucher_metadata(approved),
            ),
        )
        run(
            "ledger",
            lambda: self._ledger.post_double_entry(
                double_entry_request(approved, bank_code)
            ),
        )
        run("funds", lambda: self._funds_updater.execute(case.id))

        self._usage_logger.info(
            f"{user.email} approved transaction {transaction_id} "
            f"on case {case.id}"
        )
        return approved


__all__ = ["APPROVAL_STEPS", "ApproveTransactionUseCase"]
