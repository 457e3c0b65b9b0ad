"""Port for posting double entries to the case ledger."""

from typing import Protocol

from src.domain.models import AccountingEntryRecord, DoubleEntryRequest


class LedgerPostingPort(Protocol):
    """Port writing the accounting entries of an approved transaction."""

    def post_double_entry(
        self,
        request: DoubleEntryRequest,
    ) -> list[AccountingEntryRecord]:
        """Write the entries for a transaction and return them.

        Raises:
            LedgerPostingError: If the entries cannot be built or written.
        """


__all__ = ["LedgerPostingPort"]
