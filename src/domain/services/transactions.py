"""Filters and error-tolerant folds over transaction lists."""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal
from logging import Logger
from typing import TypeVar

from src.domain.constants import (
    CASE_ACCOUNT,
    PAYMENT,
    RECEIPT,
    STATUS_APPROVED,
)
from src.domain.models import ChartOfAccountRecord, TransactionRecord
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
    is_distribution_account,
)
from src.utils.decimal_utils import coerce_decimal


T = TypeVar("T")

RECOVERABLE_ERRORS = (
    ArithmeticError,
    AttributeError,
    KeyError,
    TypeError,
    ValueError,
)


def filter_transactions(
    transactions: Iterable[TransactionRecord],
    *,
    case_id: str | None = None,
    target_account: str | None = None,
    status: str | None = None,
    transaction_type: str | None = None,
) -> list[TransactionRecord]:
    """Return transactions matching every provided predicate.

    Args:
        transactions: Transactions to filter.
        case_id: Keep only transactions of this case.
        target_account: Keep only transactions posted against this bank
            account (missing targets count as primary).
        status: Keep only transactions in this status.
        transaction_type: Keep only receipts or payments.

    Returns:
        list[TransactionRecord]: Matching transactions in input order.
    """
    selected = []
    for txn in transactions:
        if case_id is not None and txn.case_id != case_id:
            continue
        if (
            target_account is not None
            and txn.resolved_target_account != target_account
        ):
            continue
        if status is not None and txn.status != status:
            continue
        if (
            transaction_type is not None
            and txn.transaction_type != transaction_type
        ):
            continue
        selected.append(txn)
    return selected


def safe_sum(
    items: Iterable[T],
    value_of: Callable[[T], Decimal],
    logger: Logger,
    label: str = "amount",
) -> Decimal:
    """Sum per-item values, counting failing items as zero.

    Args:
        items: Records to fold.
        value_of: Function returning the contribution of one record.
        logger: Logger receiving one error per failing record.
        label: Name of the figure, used in log messages.

    Returns:
        Decimal: Sum of every contribution that could be computed.
    """
    total = Decimal("0")
    for index, item in enumerate(items):
        try:
            total += value_of(item)
        except RECOVERABLE_ERRORS as exc:
            record_id = getattr(item, "id", None) or f"#{index}"
            logger.error(
                f"Ignoring {label} of record {record_id}: {exc!r}"
            )
    return total


def signed_amount(txn: TransactionRecord) -> Decimal:
    """Return the amount as a cash movement: receipts in, others out."""
    amount = coerce_decimal(txn.amount)
    return amount if txn.transaction_type == RECEIPT else -amount


def compute_balance(
    transactions: Iterable[TransactionRecord],
    logger: Logger,
) -> Decimal:
    """Return receipts minus payments on the case account.

    Every status counts; callers wanting approved-only figures filter
    first.
    """
    on_case_account = [
        txn for txn in transactions if txn.account_type == CASE_ACCOUNT
    ]
    return safe_sum(on_case_account, signed_amount, logger, "balance")


def compute_funds_distributed(
    transactions: Iterable[TransactionRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
) -> Decimal:
    """Return approved case-account payments to distribution accounts."""
    lookup = build_chart_lookup(chart)
    distributions = [
        txn
        for txn in transactions
        if txn.account_type == CASE_ACCOUNT
        and txn.transaction_type == PAYMENT
        and txn.status == STATUS_APPROVED
        and is_distribution_account(txn.account_code, lookup)
    ]
    return safe_sum(
        distributions,
        lambda txn: coerce_decimal(txn.amount),
        logger,
        "funds distributed",
    )


def parse_date(value: date | str | None) -> date | None:
    """Parse an ISO date or timestamp into a date.

    Raises:
        ValueError: If a string is not an ISO date or timestamp.
        TypeError: If the value has an unsupported type.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        try:
            return date.fromisoformat(cleaned)
        except ValueError:
            return datetime.fromisoformat(cleaned).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def latest_bank_request_date(
    transactions: Iterable[TransactionRecord],
    logger: Logger,
) -> date | None:
    """Return the most recent bank request date, ignoring bad values."""
    latest: date | None = None
    for txn in transactions:
        if not txn.bank_request_date:
            continue
        try:
            parsed = parse_date(txn.bank_request_date)
        except RECOVERABLE_ERRORS as exc:
            logger.error(
                f"Ignoring bank request date of transaction {txn.id}: "
                f"{exc!r}"
            )
            continue
        if parsed is not None and (latest is None or parsed > latest):
            latest = parsed
    return latest


__all__ = [
    "RECOVERABLE_ERRORS",
    "filter_transactions",
    "safe_sum",
    "signed_amount",
    "compute_balance",
    "compute_funds_distributed",
    "parse_date",
    "latest_bank_request_date",
]
