"""Flattening of case aggregates into per-bank-account rows."""

from collections.abc import Iterable, Sequence
from logging import Logger

from src.domain.constants import (
    DEFAULT_PRIMARY_LABEL,
    DEFAULT_SECONDARY_LABEL,
    NO_BANK_ACCOUNT_LABEL,
    PRIMARY,
    SECONDARY,
    VAT_CONTROL_CODE,
)
from src.domain.models import (
    AccountingEntryRecord,
    BankAccountRow,
    BankDetails,
    CaseAggregate,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
)
from src.domain.services.transactions import (
    compute_balance,
    compute_funds_distributed,
    filter_transactions,
    latest_bank_request_date,
)
from src.domain.services.vat import vat_control_balance


def flatten_to_rows(
    aggregate: CaseAggregate,
    transactions: Sequence[TransactionRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    entries: Sequence[AccountingEntryRecord],
    logger: Logger,
    vat_control_code: str = VAT_CONTROL_CODE,
) -> list[BankAccountRow]:
    """Expand one case into a row per configured bank account.

    Account rows recompute balance, VAT, funds distributed and the last
    bank request date from the transactions targeting that account; VAT
    entries are attributed through their transaction, and entries with no
    transaction (manual journals) land on the first configured row. SoA
    ETR and bonding figures stay case-level. A case with no configured
    account yields a single row carrying the case-wide figures.

    Args:
        aggregate: Case-level figures.
        transactions: Transactions snapshot (any case).
        chart: Chart-of-accounts snapshot or lookup.
        entries: Accounting entries snapshot (any case).
        logger: Logger used for degraded records.
        vat_control_code: Ledger code of the VAT control account.

    Returns:
        list[BankAccountRow]: Zero to two account rows, or one fallback row.
    """
    lookup = build_chart_lookup(chart)
    case = aggregate.case
    case_transactions = filter_transactions(transactions, case_id=case.id)

    rows = []
    accounts = (
        (PRIMARY, case.bank_details, DEFAULT_PRIMARY_LABEL),
        (SECONDARY, case.secondary_bank_details, DEFAULT_SECONDARY_LABEL),
    )
    for target, details, default_label in accounts:
        if details is None or not details.is_configured:
            continue
        scoped = filter_transactions(case_transactions, target_account=target)
        scoped_ids: set[str | None] = {txn.id for txn in scoped}
        if not rows:
            scoped_ids.update((None, ""))
        rows.append(
            _row(
                aggregate,
                row_id=f"{case.id}-{target}",
                account_type=(details.account_type or "").strip()
                or default_label,
                balance=compute_balance(scoped, logger),
                vat_balance=vat_control_balance(
                    case.id,
                    entries,
                    logger,
                    account_code=vat_control_code,
                    transaction_ids=scoped_ids,
                ),
                funds_distributed=compute_funds_distributed(
                    scoped,
                    lookup,
                    logger,
                ),
                last_bank_request_date=latest_bank_request_date(
                    scoped,
                    logger,
                ),
                account_data=details,
                is_primary=target == PRIMARY,
            )
        )

    if rows:
        return rows

    return [
        _row(
            aggregate,
            row_id=f"{case.id}-no-account",
            account_type=NO_BANK_ACCOUNT_LABEL,
            balance=aggregate.account_balance,
            vat_balance=aggregate.vat_control_balance,
            funds_distributed=compute_funds_distributed(
                case_transactions,
                lookup,
                logger,
            ),
            last_bank_request_date=aggregate.last_bank_request_date,
            account_data=None,
            is_primary=None,
        )
    ]


def flatten_all(
    aggregates: Iterable[CaseAggregate],
    transactions: Sequence[TransactionRecord],
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
    entries: Sequence[AccountingEntryRecord],
    logger: Logger,
    vat_control_code: str = VAT_CONTROL_CODE,
) -> list[BankAccountRow]:
    """Flatten every aggregate and sort rows by company name."""
    lookup = build_chart_lookup(chart)
    rows: list[BankAccountRow] = []
    for aggregate in aggregates:
        rows.extend(
            flatten_to_rows(
                aggregate,
                transactions,
                lookup,
                entries,
                logger,
                vat_control_code=vat_control_code,
            )
        )
    return sorted(rows, key=_company_sort_key)


def _company_sort_key(row: BankAccountRow) -> str:
    return (row.company_name or "").casefold()


def _row(
    aggregate: CaseAggregate,
    *,
    row_id: str,
    account_type: str,
    balance,
    vat_balance,
    funds_distributed,
    last_bank_request_date,
    account_data: BankDetails | None,
    is_primary: bool | None,
) -> BankAccountRow:
    case = aggregate.case
    return BankAccountRow(
        id=row_id,
        case_id=case.id,
        account_type=account_type,
        case_reference=case.case_reference,
        company_name=case.company_name,
        case_type=case.case_type,
        balance=balance,
        vat_balance=vat_balance,
        funds_distributed=funds_distributed,
        last_bank_request_date=last_bank_request_date,
        soa_etr=aggregate.soa_etr,
        bonding_required=aggregate.bonded_amount,
        bonding_shortfall=aggregate.bonding_shortfall,
        account_data=account_data,
        is_primary=is_primary,
    )


__all__ = ["flatten_to_rows", "flatten_all"]
