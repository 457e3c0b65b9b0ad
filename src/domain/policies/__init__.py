"""Domain policies package."""

from .case_filters import is_bonding_excluded, matches_case_search

__all__ = ["is_bonding_excluded", "matches_case_search"]
