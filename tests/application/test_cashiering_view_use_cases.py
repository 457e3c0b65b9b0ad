"""Tests for the read-only cashiering view use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_bank_account_rows import (
    GetBankAccountRowsUseCase,
)
from src.application.use_cases.get_bonding_overview import (
    GetBondingOverviewUseCase,
)
from src.application.use_cases.get_case_aggregates import (
    GetCaseAggregatesUseCase,
)
from src.application.use_cases.get_case_type_summary import (
    GetCaseTypeSummaryUseCase,
)
from src.application.use_cases.load_snapshot import CashieringSnapshot
from src.domain.models import (
    AccountingEntryRecord,
    BankDetails,
    CaseRecord,
    ChartOfAccountRecord,
    TransactionRecord,
)


def _snapshot() -> CashieringSnapshot:
    cases = [
        CaseRecord(
            id="c1",
            company_name="Zeta Ltd",
            case_type="CVL",
            initial_bond_value=Decimal("100"),
            appointment_date=date(2024, 1, 1),
            bank_details=BankDetails(bank_name="Barclays"),
            secondary_bank_details=BankDetails(bank_name="HSBC"),
        ),
        CaseRecord(
            id="c2",
            company_name="Acme Ltd",
            case_type="Advisory",
            appointment_date=date(2025, 1, 1),
        ),
    ]
    transactions = [
        TransactionRecord(
            id="t1",
            case_id="c1",
            transaction_type="receipt",
            account_type="case_account",
            status="approved",
            amount=Decimal("500"),
        ),
        TransactionRecord(
            id="t2",
            case_id="c2",
            transaction_type="receipt",
            account_type="case_account",
            status="approved",
            amount=Decimal("70"),
        ),
    ]
    entries = [
        AccountingEntryRecord("e1", "c1", "t1", "R400", "0", "500"),
        AccountingEntryRecord("e2", "c1", "t1", "VATX", "5", "0"),
    ]
    chart = [ChartOfAccountRecord("R400", account_group="Asset Realisations")]
    return CashieringSnapshot(
        cases=cases,
        transactions=transactions,
        entries=entries,
        chart=chart,
    )


def test_case_aggregates_use_configured_vat_code_and_search() -> None:
    """Aggregates should honour the VAT control code and search term."""
    use_case = GetCaseAggregatesUseCase(
        logger=MagicMock(), vat_control_code="VATX"
    )

    aggregates = use_case.execute(_snapshot())
    searched = use_case.execute(_snapshot(), search="hsbc")

    assert [item.case.id for item in aggregates] == ["c1", "c2"]
    assert aggregates[0].vat_control_balance == Decimal("5")
    assert aggregates[0].is_underbonded is True
    assert [item.case.id for item in searched] == ["c1"]


def test_bank_account_rows_are_sorted_by_company() -> None:
    """Rows should cover both accounts and the fallback, sorted."""
    rows = GetBankAccountRowsUseCase(logger=MagicMock()).execute(_snapshot())

    assert [(row.company_name, row.id) for row in rows] == [
        ("Acme Ltd", "c2-no-account"),
        ("Zeta Ltd", "c1-primary"),
        ("Zeta Ltd", "c1-secondary"),
    ]


def test_case_type_summary_is_sorted_by_type() -> None:
    """Summary keys should come back in type order."""
    summary = GetCaseTypeSummaryUseCase(logger=MagicMock()).execute(
        _snapshot()
    )

    assert list(summary) == ["Advisory", "CVL"]
    assert summary["CVL"].total_held == Decimal("500")


def test_bonding_overview_warns_about_underbonded_cases() -> None:
    """Underbonded cases should be counted in a warning."""
    logger = MagicMock()

    overview = GetBondingOverviewUseCase(logger=logger).execute(_snapshot())

    assert [item.case.id for item in overview.bonding_cases] == ["c1"]
    assert [item.case.id for item in overview.excluded_cases] == ["c2"]
    logger.warning.assert_called_once_with("1 cases are underbonded")
