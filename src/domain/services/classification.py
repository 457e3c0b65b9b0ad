"""Chart-of-accounts classification of account codes."""

from collections.abc import Iterable, Mapping

from src.domain.constants import DISTRIBUTION_GROUPS, REALISATION_GROUPS
from src.domain.models import ChartOfAccountRecord


ChartLookup = Mapping[str, ChartOfAccountRecord]


def build_chart_lookup(
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> ChartLookup:
    """Index a chart-of-accounts snapshot by account code.

    The first record wins when a code appears more than once.
    """
    if isinstance(chart, Mapping):
        return chart
    lookup: dict[str, ChartOfAccountRecord] = {}
    for account in chart:
        lookup.setdefault(str(account.account_code), account)
    return lookup


def is_distribution_account(
    account_code: str | None,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> bool:
    """Return True when the code maps to a distribution-like group.

    Args:
        account_code: Code to classify; empty or unknown codes are not
            distribution accounts.
        chart: Chart-of-accounts snapshot or lookup.

    Returns:
        bool: True for Distributions, Unsecured or Preferential Creditors,
        compared case-insensitively.
    """
    account = _find(account_code, chart)
    if account is None:
        return False
    group = (account.account_group or "").lower()
    return group in DISTRIBUTION_GROUPS


def is_realisation_account(
    account_code: str | None,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> bool:
    """Return True when the code maps to a realisation-like group.

    Unlike the distribution check the comparison is case-sensitive:
    "asset realisations" does not match "Asset Realisations".
    """
    account = _find(account_code, chart)
    if account is None:
        return False
    group = (account.account_group or "").strip()
    return group in REALISATION_GROUPS


def _find(
    account_code: str | None,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> ChartOfAccountRecord | None:
    if not account_code:
        return None
    return build_chart_lookup(chart).get(str(account_code))


__all__ = [
    "ChartLookup",
    "build_chart_lookup",
    "is_distribution_account",
    "is_realisation_account",
]
