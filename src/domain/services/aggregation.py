"""Case-level aggregation of transactions and ledger entries."""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from logging import Logger

from src.domain.constants import STATUS_APPROVED, VAT_CONTROL_CODE
from src.domain.models import (
    AccountingEntryRecord,
    CaseAggregate,
    CaseFunds,
    CaseRecord,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.domain.policies import matches_case_search
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
    is_realisation_account,
)
from src.domain.services.transactions import (
    RECOVERABLE_ERRORS,
    compute_balance,
    compute_funds_distributed,
    filter_transactions,
    latest_bank_request_date,
    safe_sum,
)
from src.domain.services.vat import vat_control_balance
from src.utils.decimal_utils import coerce_decimal


def compute_asset_realisations(
    case_id: str,
    transactions: Iterable[TransactionRecord],
    entries: Iterable[AccountingEntryRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
) -> Decimal:
    """Return net credits on realisation accounts from approved postings.

    Entries are restricted to approved transactions of the case, grouped
    by account code, summed as credit minus debit per code and then
    summed across the realisation codes.
    """
    lookup = build_chart_lookup(chart)
    approved_ids = {
        txn.id
        for txn in filter_transactions(
            transactions,
            case_id=case_id,
            status=STATUS_APPROVED,
        )
    }
    by_code: dict[str, list[AccountingEntryRecord]] = {}
    for entry in entries:
        if entry.case_id != case_id:
            continue
        if entry.transaction_id not in approved_ids:
            continue
        by_code.setdefault(entry.account_code, []).append(entry)

    total = Decimal("0")
    for account_code, code_entries in by_code.items():
        if not is_realisation_account(account_code, lookup):
            continue
        total += safe_sum(
            code_entries,
            _net_credit,
            logger,
            f"realisations on {account_code}",
        )
    return total


def compute_bonded_amount(case: CaseRecord) -> Decimal:
    """Return the initial bond plus every recorded increase."""
    increases = sum(
        (coerce_decimal(item.increase_value) for item in case.bond_increases),
        Decimal("0"),
    )
    return coerce_decimal(case.initial_bond_value) + increases


def build_case_aggregate(
    case: CaseRecord,
    transactions: Sequence[TransactionRecord],
    entries: Sequence[AccountingEntryRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
    vat_control_code: str = VAT_CONTROL_CODE,
) -> CaseAggregate:
    """Compute the financial figures of one case.

    Args:
        case: Case to aggregate.
        transactions: Transactions snapshot (any case).
        entries: Accounting entries snapshot (any case).
        chart: Chart-of-accounts snapshot or lookup.
        logger: Logger used for degraded records.
        vat_control_code: Ledger code of the VAT control account.

    Returns:
        CaseAggregate: Computed figures, or safe defaults when the case
        data cannot be aggregated.
    """
    try:
        lookup = build_chart_lookup(chart)
        case_transactions = filter_transactions(transactions, case_id=case.id)
        asset_realisations = compute_asset_realisations(
            case.id,
            case_transactions,
            entries,
            lookup,
            logger,
        )
        bonded_amount = compute_bonded_amount(case)
        return CaseAggregate(
            case=case,
            account_balance=compute_balance(case_transactions, logger),
            vat_control_balance=vat_control_balance(
                case.id,
                entries,
                logger,
                account_code=vat_control_code,
            ),
            last_bank_request_date=latest_bank_request_date(
                case_transactions,
                logger,
            ),
            soa_etr=coerce_decimal(case.soa_etr),
            asset_realisations=asset_realisations,
            bonded_amount=bonded_amount,
            is_underbonded=asset_realisations > bonded_amount,
        )
    except RECOVERABLE_ERRORS as exc:
        logger.error(f"Failed to aggregate case {case.id}: {exc!r}")
        return CaseAggregate.fallback(case)


def build_case_aggregates(
    cases: Iterable[CaseRecord],
    transactions: Sequence[TransactionRecord],
    entries: Sequence[AccountingEntryRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
    vat_control_code: str = VAT_CONTROL_CODE,
) -> list[CaseAggregate]:
    """Aggregate every case with an id, preserving input order."""
    lookup = build_chart_lookup(chart)
    aggregates = []
    for case in cases:
        if not case.id:
            logger.warning("Skipping case without an id")
            continue
        aggregates.append(
            build_case_aggregate(
                case,
                transactions,
                entries,
                lookup,
                logger,
                vat_control_code=vat_control_code,
            )
        )
    return aggregates


def compute_case_funds(
    case_id: str,
    transactions: Iterable[TransactionRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
) -> CaseFunds:
    """Return the funds snapshot persisted on a case.

    Held funds never go below zero; distributed funds are not clamped.
    """
    case_transactions = filter_transactions(transactions, case_id=case_id)
    held = compute_balance(case_transactions, logger)
    distributed = compute_funds_distributed(case_transactions, chart, logger)
    return CaseFunds(
        case_id=case_id,
        total_funds_held=max(Decimal("0"), held),
        total_funds_distributed=distributed,
    )


def search_case_aggregates(
    aggregates: Iterable[CaseAggregate],
    term: str | None,
) -> list[CaseAggregate]:
    """Filter aggregates by company, reference, administrator or bank."""
    matches = []
    for aggregate in aggregates:
        case = aggregate.case
        if matches_case_search(
            term,
            case.company_name,
            case.case_reference,
            case.administrator_name,
            case.bank_details.bank_name if case.bank_details else "",
            (
                case.secondary_bank_details.bank_name
                if case.secondary_bank_details
                else ""
            ),
        ):
            matches.append(aggregate)
    return matches


def _net_credit(entry: AccountingEntryRecord) -> Decimal:
    return coerce_decimal(entry.credit_amount) - coerce_decimal(
        entry.debit_amount
    )


__all__ = [
    "compute_asset_realisations",
    "compute_bonded_amount",
    "build_case_aggregate",
    "build_case_aggregates",
    "compute_case_funds",
    "search_case_aggregates",
]
