"""Domain models for derived cashiering figures."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.cases import BankDetails, CaseRecord


@dataclass(frozen=True)
class CaseAggregate:
    """Case-level financial figures derived from a snapshot.

    Attributes:
        case: Case the figures belong to.
        account_balance: Receipts minus payments on the case account.
        vat_control_balance: Debits minus credits on the VAT control code.
        last_bank_request_date: Latest bank request date, if any.
        soa_etr: Statement of affairs estimated total realisations.
        asset_realisations: Net credits on realisation accounts from
            approved transactions.
        bonded_amount: Initial bond plus every increase.
        is_underbonded: Realisations exceed the bonded amount.
    """

    case: CaseRecord
    account_balance: Decimal
    vat_control_balance: Decimal
    last_bank_request_date: date | None
    soa_etr: Decimal
    asset_realisations: Decimal
    bonded_amount: Decimal
    is_underbonded: bool

    @property
    def bonding_shortfall(self) -> Decimal:
        """Return realisations not covered by the bond."""
        if not self.is_underbonded:
            return Decimal("0")
        return self.asset_realisations - self.bonded_amount

    @classmethod
    def fallback(cls, case: CaseRecord) -> "CaseAggregate":
        """Return an aggregate with safe defaults for a failing case."""
        return cls(
            case=case,
            account_balance=Decimal("0"),
            vat_control_balance=Decimal("0"),
            last_bank_request_date=None,
            soa_etr=Decimal("0"),
            asset_realisations=Decimal("0"),
            bonded_amount=Decimal("0"),
            is_underbonded=False,
        )


@dataclass(frozen=True)
class BankAccountRow:
    """Display row for one bank account of a case."""

    id: str
    case_id: str
    account_type: str
    case_reference: str
    company_name: str
    case_type: str
    balance: Decimal
    vat_balance: Decimal
    funds_distributed: Decimal
    last_bank_request_date: date | None
    soa_etr: Decimal
    bonding_required: Decimal
    bonding_shortfall: Decimal
    account_data: BankDetails | None
    is_primary: bool | None


@dataclass(frozen=True)
class CaseTypeTotals:
    """Funds held and distributed across cases of one type."""

    total_held: Decimal
    total_distributed: Decimal
    case_count: int


@dataclass(frozen=True)
class CaseFunds:
    """Denormalised funds snapshot written back onto a case."""

    case_id: str
    total_funds_held: Decimal
    total_funds_distributed: Decimal


@dataclass(frozen=True)
class BondingOverview:
    """Cases split between the bonding table and excluded case types."""

    bonding_cases: list[CaseAggregate]
    excluded_cases: list[CaseAggregate]


__all__ = [
    "CaseAggregate",
    "BankAccountRow",
    "CaseTypeTotals",
    "CaseFunds",
    "BondingOverview",
]
