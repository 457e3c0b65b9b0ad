"""Policies deciding which cases appear on cashiering screens."""

from src.domain.constants import BONDING_EXCLUDED_CASE_TYPES


def is_bonding_excluded(case_type: str | None) -> bool:
    """Return True for case types listed apart from the bonding table.

    Args:
        case_type: Case type as stored.

    Returns:
        bool: True for Advisory and Receiverships cases.
    """
    return (case_type or "").strip() in BONDING_EXCLUDED_CASE_TYPES


def matches_case_search(term: str | None, *values: str | None) -> bool:
    """Return True when ``term`` appears in any of ``values``.

    An empty term always matches. Matching is case-insensitive.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in values)


__all__ = ["is_bonding_excluded", "matches_case_search"]
