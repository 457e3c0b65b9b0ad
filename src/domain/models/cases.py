"""Domain models for insolvency cases and their bank accounts."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class BankDetails:
    """Bank account configured on a case.

    Attributes:
        account_name: Name on the account.
        bank_name: Bank holding the account.
        account_number: Account number.
        sort_code: Sort code.
        account_type: Display label (e.g. "GBP Primary").
        chart_of_accounts: Ledger code posted to for this account.
    """

    account_name: str = ""
    bank_name: str = ""
    account_number: str = ""
    sort_code: str = ""
    account_type: str = ""
    chart_of_accounts: str = ""

    @property
    def is_configured(self) -> bool:
        """Return True when any identifying field is filled in."""
        return any(
            (value or "").strip()
            for value in (
                self.account_name,
                self.bank_name,
                self.account_number,
                self.sort_code,
            )
        )


@dataclass(frozen=True)
class BondIncrease:
    """Increase applied to a case bond after its initial setup."""

    increase_value: Decimal
    increase_date: date | None = None


@dataclass(frozen=True)
class CaseRecord:
    """Insolvency case as read from storage."""

    id: str
    company_name: str = ""
    case_reference: str = ""
    case_type: str = ""
    administrator_name: str = ""
    bank_details: BankDetails | None = None
    secondary_bank_details: BankDetails | None = None
    initial_bond_value: Decimal = Decimal("0")
    bond_increases: tuple[BondIncrease, ...] = field(default_factory=tuple)
    soa_etr: Decimal = Decimal("0")
    appointment_date: date | None = None
    closure_date: date | None = None
    status: str = ""
    bonding_archived: bool = False
    total_funds_held: Decimal | None = None
    total_funds_distributed: Decimal | None = None

    def bank_account_code(self, target_account: str) -> str:
        """Return the ledger code of the bank account a target maps to."""
        details = (
            self.bank_details
            if target_account == "primary"
            else self.secondary_bank_details
        )
        if details is None:
            return ""
        return (details.chart_of_accounts or "").strip()


@dataclass(frozen=True)
class CashieringUser:
    """User acting on cashiering screens."""

    email: str
    full_name: str = ""
    grade: str = ""
    signature_image_url: str = ""


__all__ = ["BankDetails", "BondIncrease", "CaseRecord", "CashieringUser"]
