"""VAT control account position."""

from collections.abc import Collection, Iterable
from decimal import Decimal
from logging import Logger

from src.domain.constants import VAT_CONTROL_CODE
from src.domain.models import AccountingEntryRecord
from src.domain.services.transactions import safe_sum
from src.utils.decimal_utils import coerce_decimal


def vat_control_balance(
    case_id: str,
    entries: Iterable[AccountingEntryRecord],
    logger: Logger,
    account_code: str = VAT_CONTROL_CODE,
    transaction_ids: Collection[str] | None = None,
) -> Decimal:
    """Return debits minus credits on the VAT control account of a case.

    Args:
        case_id: Case whose entries are folded.
        entries: Accounting entries snapshot.
        logger: Logger used for per-entry failures.
        account_code: Ledger code of the VAT control account.
        transaction_ids: When given, only entries linked to these
            transactions count.

    Returns:
        Decimal: Positive for a refund position, negative when VAT is due.
    """
    selected = [
        entry
        for entry in entries
        if entry.case_id == case_id
        and entry.account_code == account_code
        and (
            transaction_ids is None
            or entry.transaction_id in transaction_ids
        )
    ]
    return safe_sum(selected, _net_debit, logger, "VAT control")


def vat_position(balance: Decimal) -> str:
    """Return the label shown next to a VAT control balance."""
    if balance > 0:
        return "Refund"
    if balance < 0:
        return "Due"
    return ""


def _net_debit(entry: AccountingEntryRecord) -> Decimal:
    return coerce_decimal(entry.debit_amount) - coerce_decimal(
        entry.credit_amount
    )


__all__ = ["vat_control_balance", "vat_position"]
