"""Validation of transactions before they are posted or edited."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from src.domain.constants import POSTING_GRADE
from src.domain.errors import PostingValidationError
from src.domain.models import (
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionEdit,
    TransactionRecord,
)
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
)
from src.utils.decimal_utils import coerce_decimal


def validate_for_posting(
    txn: TransactionRecord,
    case: CaseRecord | None,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    user: CashieringUser | None,
) -> str:
    """Check that a pending transaction can be approved and posted.

    Args:
        txn: Transaction awaiting approval.
        case: Parent case, or None when it could not be found.
        chart: Chart-of-accounts snapshot or lookup.
        user: User approving the transaction.

    Returns:
        str: Ledger code of the bank account the transaction posts to.

    Raises:
        PostingValidationError: With a message suitable for display.
    """
    if user is None or not user.email:
        raise PostingValidationError(
            "You must be logged in to post transactions."
        )
    if user.grade != POSTING_GRADE:
        raise PostingValidationError(
            f"Only users with {POSTING_GRADE} grade can post transactions."
        )
    if not (txn.account_code or "").strip():
        raise PostingValidationError(
            "This transaction cannot be posted because it is missing an "
            "Account Code. Reject it and re-create it with a valid account "
            "code, or edit the pending transaction to add one."
        )
    if case is None:
        raise PostingValidationError(
            "Cannot approve transaction: the parent case could not be found."
        )
    bank_code = case.bank_account_code(txn.resolved_target_account)
    if not bank_code:
        raise PostingValidationError(
            "Cannot approve transaction: the selected bank account doesn't "
            "have an account code assigned."
        )
    _require_known_code(
        txn.account_code,
        build_chart_lookup(chart),
        f'Failed to post: the account code "{txn.account_code}" is not a '
        "valid code in your Chart of Accounts.",
    )
    if not user.signature_image_url:
        raise PostingValidationError(
            "You need to upload your signature in User Management before "
            "approving transactions."
        )
    return bank_code


def validate_transaction_edit(
    edit: TransactionEdit,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    require_details: bool = True,
) -> Decimal:
    """Check edited transaction fields and return the gross amount.

    Approved transactions are reposted after an edit, so they need a
    description, payee, date and a positive gross amount. Pending
    transactions only need a valid account code
    (``require_details=False``).

    Raises:
        PostingValidationError: With a message suitable for display.
    """
    if not (edit.account_code or "").strip():
        raise PostingValidationError("Account code is required.")

    try:
        gross = coerce_decimal(edit.net_amount) + coerce_decimal(
            edit.vat_amount
        )
    except (InvalidOperation, TypeError) as exc:
        raise PostingValidationError(
            "Net and VAT amounts must be numbers."
        ) from exc

    if require_details:
        if not (
            edit.description
            and edit.payee_name
            and edit.transaction_date
        ):
            raise PostingValidationError(
                "Description, Payee, Date and Account Code are required."
            )
        if gross <= 0:
            raise PostingValidationError(
                "Gross amount must be a positive number."
            )

    _require_known_code(
        edit.account_code,
        build_chart_lookup(chart),
        f'The account code "{edit.account_code}" is not valid. Select a '
        "valid code from your Chart of Accounts.",
    )
    return gross


def _require_known_code(
    code: str,
    lookup: ChartLookup,
    message: str,
) -> None:
    if code not in lookup:
        raise PostingValidationError(message)


__all__ = ["validate_for_posting", "validate_transaction_edit"]
