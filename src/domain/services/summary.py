"""Cross-case roll-up of funds by case type."""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from logging import Logger

from src.domain.models import (
    CaseRecord,
    CaseTypeTotals,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.domain.services.aggregation import compute_case_funds
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
)


def summary_by_case_type(
    cases: Iterable[CaseRecord],
    transactions: Sequence[TransactionRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    logger: Logger,
) -> dict[str, CaseTypeTotals]:
    """Return funds held and distributed per case type.

    Held funds are clamped at zero per case before summing; distributed
    funds are summed as computed. Cases without a type are ignored.
    """
    lookup = build_chart_lookup(chart)
    held: dict[str, Decimal] = {}
    distributed: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for case in cases:
        case_type = case.case_type
        if not case_type:
            continue
        funds = compute_case_funds(case.id, transactions, lookup, logger)
        held[case_type] = held.get(case_type, Decimal("0")) + (
            funds.total_funds_held
        )
        distributed[case_type] = distributed.get(
            case_type, Decimal("0")
        ) + funds.total_funds_distributed
        counts[case_type] = counts.get(case_type, 0) + 1

    return {
        case_type: CaseTypeTotals(
            total_held=held[case_type],
            total_distributed=distributed[case_type],
            case_count=counts[case_type],
        )
        for case_type in counts
    }


__all__ = ["summary_by_case_type"]
