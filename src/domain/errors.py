"""Domain exceptions for cashiering workflows."""


class CashieringError(Exception):
    """Base class for cashiering failures surfaced to users."""


class TransactionNotFoundError(CashieringError):
    """Raised when a transaction id does not resolve to a record."""


class PostingValidationError(CashieringError):
    """Raised when a transaction cannot be posted or saved as entered."""


class LedgerPostingError(CashieringError):
    """Raised when double-entry lines cannot be built or written."""


class ApprovalStepError(CashieringError):
    """Raised when a step of the approval sequence fails.

    Attributes:
        step: Name of the step that failed.
        completed_steps: Steps applied before the failure. They are not
            rolled back.
    """

    def __init__(
        self,
        step: str,
        completed_steps: tuple[str, ...],
        message: str,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.completed_steps = completed_steps


__all__ = [
    "CashieringError",
    "TransactionNotFoundError",
    "PostingValidationError",
    "LedgerPostingError",
    "ApprovalStepError",
]
