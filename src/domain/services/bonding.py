"""Bonding table selection and status."""

from collections.abc import Iterable
from datetime import date

from src.domain.models import BondingOverview, CaseAggregate
from src.domain.policies import is_bonding_excluded, matches_case_search


SORT_FIELDS = ("appointment_date", "case_type", "closure_date")


def split_bonding_cases(
    aggregates: Iterable[CaseAggregate],
    term: str | None = None,
    sort_by: str = "appointment_date",
    descending: bool = True,
) -> BondingOverview:
    """Split live cases into the bonding table and excluded case types.

    Archived cases are dropped. Excluded types (Advisory, Receiverships)
    are always listed by most recent appointment.

    Args:
        aggregates: Case aggregates to split.
        term: Optional search over company, reference and case type.
        sort_by: One of appointment_date, case_type or closure_date.
        descending: Sort direction for the bonding cases.

    Returns:
        BondingOverview: Bonding cases and excluded cases.

    Raises:
        ValueError: If sort_by is not a supported field.
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(
            f"Unsupported bonding sort: {sort_by}. "
            f"Expected one of {', '.join(SORT_FIELDS)}."
        )
    live = []
    for aggregate in aggregates:
        case = aggregate.case
        if case.bonding_archived:
            continue
        if not matches_case_search(
            term,
            case.company_name,
            case.case_reference,
            case.case_type,
        ):
            continue
        live.append(aggregate)

    excluded = [
        item
        for item in live
        if is_bonding_excluded(item.case.case_type)
    ]
    bonding = [
        item
        for item in live
        if not is_bonding_excluded(item.case.case_type)
    ]

    if sort_by == "case_type":
        bonding.sort(
            key=lambda item: (item.case.case_type or "").lower(),
            reverse=descending,
        )
    else:
        bonding.sort(
            key=lambda item: _ordinal(getattr(item.case, sort_by)),
            reverse=descending,
        )
    excluded.sort(
        key=lambda item: _ordinal(item.case.appointment_date),
        reverse=True,
    )
    return BondingOverview(bonding_cases=bonding, excluded_cases=excluded)


def bonding_status(aggregate: CaseAggregate) -> str:
    """Return the badge label for a bonding row."""
    if aggregate.is_underbonded:
        return "Underbonded"
    if aggregate.bonded_amount > 0:
        return "Bonded"
    return "No Bond"


def _ordinal(value: date | None) -> int:
    return value.toordinal() if value else 0


__all__ = ["SORT_FIELDS", "split_bonding_cases", "bonding_status"]
