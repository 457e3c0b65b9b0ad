"""Streamlit cashiering dashboard entry point."""

from collections.abc import Callable, Sequence
from datetime import date
from decimal import Decimal, InvalidOperation
import importlib

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from src.adapters.interface.streamlit.bonding_chart import (
    build_bonding_chart_model,
    build_plotly_figure,
)
from src.adapters.interface.streamlit.case_type_chart import (
    build_case_type_chart,
    format_gbp,
)
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
from src.domain.constants import STATUS_APPROVED, STATUS_PENDING
from src.domain.errors import ApprovalStepError, CashieringError
from src.domain.models import (
    BankAccountRow,
    CaseAggregate,
    CashieringUser,
    TransactionEdit,
    TransactionRecord,
)
from src.domain.services.bonding import SORT_FIELDS, bonding_status
from src.domain.services.transactions import parse_date
from src.domain.services.vat import vat_position
from src.infrastructure.container import (
    build_approve_transaction,
    build_delete_transaction,
    build_edit_approved_transaction,
    build_edit_pending_transaction,
    build_reject_transaction,
    build_snapshot_loader,
    prepare_database,
)
from src.infrastructure.settings import CashieringSettings


PAGES = ["Bank Accounts", "Bonding", "Case Types", "Pending Approvals"]

_FLASH_KEY = "cashiering_flash"
_OVERRIDES_KEY = "pending_overrides"


def _fetch_snapshot() -> CashieringSnapshot:
    """Load the cashiering snapshot from the configured database."""
    settings = CashieringSettings.from_env()
    db_port = prepare_database(settings=settings)
    return build_snapshot_loader(db_port, settings=settings).execute()


@st.cache_data(show_spinner=False)
def _load_snapshot(schema_version: int = 1) -> CashieringSnapshot:
    """Cached wrapper around _fetch_snapshot for Streamlit sessions."""
    _ = schema_version
    return _fetch_snapshot()


def _clear_snapshot_cache() -> None:
    st.cache_data.clear()


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Return whether the numpy/pandas imports Altair relies on work."""
    try:
        numpy = importlib.import_module("numpy")
        pandas = importlib.import_module("pandas")
    except ImportError as exc:
        return False, f"Charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Charts unavailable: numpy import is incomplete."
    if not hasattr(pandas, "Timestamp"):
        return False, "Charts unavailable: pandas import is incomplete."
    return True, None


def _format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else "—"


def _format_vat(balance: Decimal) -> str:
    """Format a VAT control balance with its Refund/Due label."""
    label = vat_position(balance)
    amount = format_gbp(abs(balance))
    return f"{amount} {label}" if label else amount


def _format_amount(value) -> str:
    if value is None or value == "":
        return "—"
    try:
        return format_gbp(Decimal(str(value).replace(",", "")))
    except (InvalidOperation, ValueError):
        return str(value)


def _bank_account_table(rows: Sequence[BankAccountRow]) -> list[dict]:
    """Return display records for the bank accounts table."""
    return [
        {
            "Case": row.case_reference,
            "Company": row.company_name,
            "Case type": row.case_type,
            "Account": row.account_type,
            "Bank": row.account_data.bank_name if row.account_data else "—",
            "Balance": format_gbp(row.balance),
            "VAT control": _format_vat(row.vat_balance),
            "Funds distributed": format_gbp(row.funds_distributed),
            "Last bank request": _format_date(row.last_bank_request_date),
            "SoA ETR": format_gbp(row.soa_etr),
            "Bonding required": format_gbp(row.bonding_required),
            "Bonding shortfall": (
                format_gbp(row.bonding_shortfall)
                if row.bonding_shortfall
                else "—"
            ),
        }
        for row in rows
    ]


def _bonding_table(aggregates: Sequence[CaseAggregate]) -> list[dict]:
    """Return display records for the bonding table."""
    return [
        {
            "Case": item.case.case_reference,
            "Company": item.case.company_name,
            "Case type": item.case.case_type,
            "Appointed": _format_date(item.case.appointment_date),
            "Closed": _format_date(item.case.closure_date),
            "Bonded amount": format_gbp(item.bonded_amount),
            "Asset realisations": format_gbp(item.asset_realisations),
            "Shortfall": (
                format_gbp(item.bonding_shortfall)
                if item.is_underbonded
                else "—"
            ),
            "Status": bonding_status(item),
        }
        for item in aggregates
    ]


def _transaction_summary(
    txn: TransactionRecord,
    snapshot: CashieringSnapshot,
) -> str:
    case = snapshot.find_case(txn.case_id)
    reference = case.case_reference if case else txn.case_id
    return (
        f"{reference} · {txn.transaction_type.title()} · "
        f"{txn.payee_name or 'Unknown payee'} · {_format_amount(txn.amount)}"
    )


def _apply_overrides(
    transactions: Sequence[TransactionRecord],
) -> list[TransactionRecord]:
    """Replace transactions patched locally after a pending edit."""
    overrides = st.session_state.get(_OVERRIDES_KEY, {})
    return [overrides.get(txn.id, txn) for txn in transactions]


def _run_action(action: Callable[[], object], success_message: str) -> bool:
    """Run a mutation, report failures, and reload data on success."""
    try:
        action()
    except ApprovalStepError as exc:
        completed = ", ".join(exc.completed_steps) or "none"
        st.error(
            f"{exc} (failed at step '{exc.step}'; completed steps: "
            f"{completed})"
        )
        _clear_snapshot_cache()
        return False
    except CashieringError as exc:
        st.error(str(exc))
        return False
    except SQLAlchemyError as exc:
        st.error(f"Database error: {exc}")
        return False
    st.session_state[_FLASH_KEY] = success_message
    st.session_state[_OVERRIDES_KEY] = {}
    _clear_snapshot_cache()
    st.rerun()
    return True


def _select_user(snapshot: CashieringSnapshot) -> CashieringUser | None:
    """Let the operator choose which user they act as."""
    if not snapshot.users:
        st.sidebar.caption("No users configured.")
        return None
    emails = [user.email for user in snapshot.users]
    email = st.sidebar.selectbox("Acting as", emails)
    return snapshot.find_user(email)


def _render_bank_accounts(
    snapshot: CashieringSnapshot,
    vat_control_code: str,
) -> None:
    st.subheader("Bank Accounts")
    search = st.text_input(
        "Search cases",
        placeholder="Company, reference, administrator or bank",
    )
    aggregates = GetCaseAggregatesUseCase(
        vat_control_code=vat_control_code,
    ).execute(snapshot, search=search)
    rows = GetBankAccountRowsUseCase(
        vat_control_code=vat_control_code,
    ).execute(snapshot, aggregates=aggregates)

    total_balance = sum(
        (item.account_balance for item in aggregates),
        Decimal("0"),
    )
    underbonded = sum(1 for item in aggregates if item.is_underbonded)
    cases_col, balance_col, bonding_col = st.columns(3)
    cases_col.metric("Cases", len(aggregates))
    balance_col.metric("Funds held", format_gbp(total_balance))
    bonding_col.metric("Underbonded", underbonded)

    st.caption(f"{len(rows)} bank accounts shown")
    if not rows:
        st.info("No cases match the search.")
        return
    st.dataframe(
        _bank_account_table(rows),
        use_container_width=True,
        hide_index=True,
        height=520,
    )


def _render_bonding(
    snapshot: CashieringSnapshot,
    vat_control_code: str,
) -> None:
    st.subheader("Bonding")
    search = st.text_input(
        "Search bonding cases",
        placeholder="Company, reference or case type",
    )
    sort_col, order_col = st.columns(2)
    sort_by = sort_col.selectbox(
        "Sort by",
        list(SORT_FIELDS),
        format_func=lambda value: value.replace("_", " ").title(),
    )
    descending = order_col.checkbox("Newest first", value=True)

    overview = GetBondingOverviewUseCase(
        vat_control_code=vat_control_code,
    ).execute(
        snapshot,
        search=search,
        sort_by=sort_by,
        descending=descending,
    )
    if not overview.bonding_cases:
        st.info("No cases require bonding.")
    else:
        st.dataframe(
            _bonding_table(overview.bonding_cases),
            use_container_width=True,
            hide_index=True,
        )
        model = build_bonding_chart_model(overview.bonding_cases)
        st.plotly_chart(build_plotly_figure(model), use_container_width=True)

    if overview.excluded_cases:
        with st.expander(
            f"Advisory and Receiverships ({len(overview.excluded_cases)})"
        ):
            st.dataframe(
                _bonding_table(overview.excluded_cases),
                use_container_width=True,
                hide_index=True,
            )


def _render_case_types(snapshot: CashieringSnapshot) -> None:
    st.subheader("Case Types")
    summary = GetCaseTypeSummaryUseCase().execute(snapshot)
    if not summary:
        st.info("No case types to summarise.")
        return
    st.dataframe(
        [
            {
                "Case type": case_type,
                "Cases": totals.case_count,
                "Funds held": format_gbp(totals.total_held),
                "Funds distributed": format_gbp(totals.total_distributed),
            }
            for case_type, totals in summary.items()
        ],
        use_container_width=True,
        hide_index=True,
    )
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    st.altair_chart(build_case_type_chart(summary), use_container_width=True)


def _edit_form(
    txn: TransactionRecord,
    snapshot: CashieringSnapshot,
    form_key: str,
    include_date: bool,
) -> TransactionEdit | None:
    """Render an edit form and return the edit once submitted."""
    codes = sorted(account.account_code for account in snapshot.chart)
    if txn.account_code and txn.account_code not in codes:
        codes.insert(0, txn.account_code)
    with st.form(form_key):
        account_code = st.selectbox(
            "Account code",
            codes or [""],
            index=(
                codes.index(txn.account_code)
                if txn.account_code in codes
                else 0
            ),
        )
        description = st.text_input("Description", value=txn.description)
        payee_name = st.text_input("Payee", value=txn.payee_name)
        invoice_number = st.text_input(
            "Invoice number",
            value=txn.invoice_number,
        )
        transaction_date = txn.transaction_date
        if include_date:
            try:
                current = parse_date(txn.transaction_date)
            except (TypeError, ValueError):
                current = None
            transaction_date = st.date_input(
                "Transaction date",
                value=current or date.today(),
            )
        net_amount = st.text_input(
            "Net amount",
            value=str(txn.net_amount or ""),
        )
        vat_amount = st.text_input(
            "VAT amount",
            value=str(txn.vat_amount or ""),
        )
        submitted = st.form_submit_button("Save changes")
    if not submitted:
        return None
    return TransactionEdit(
        account_code=account_code,
        description=description,
        payee_name=payee_name,
        transaction_date=transaction_date,
        invoice_number=invoice_number,
        net_amount=net_amount,
        vat_amount=vat_amount,
    )


def _render_pending_approvals(
    snapshot: CashieringSnapshot,
    user: CashieringUser | None,
) -> None:
    st.subheader("Pending Approvals")
    transactions = _apply_overrides(snapshot.transactions)
    pending = [txn for txn in transactions if txn.status == STATUS_PENDING]
    st.caption(f"{len(pending)} transactions awaiting approval")

    for txn in pending:
        with st.expander(_transaction_summary(txn, snapshot)):
            st.write(
                {
                    "Description": txn.description,
                    "Account code": txn.account_code or "—",
                    "Bank account": txn.resolved_target_account,
                    "Net": _format_amount(txn.net_amount),
                    "VAT": _format_amount(txn.vat_amount),
                    "Gross": _format_amount(txn.amount),
                    "Invoice": txn.invoice_number or "—",
                }
            )
            approve_col, reject_col, delete_col = st.columns(3)
            if approve_col.button("Approve", key=f"approve-{txn.id}"):
                _run_action(
                    lambda: build_approve_transaction().execute(txn.id, user),
                    "Transaction approved and posted.",
                )
            if reject_col.button("Reject", key=f"reject-{txn.id}"):
                _run_action(
                    lambda: build_reject_transaction().execute(txn.id, user),
                    "Transaction rejected.",
                )
            if delete_col.button("Delete", key=f"delete-{txn.id}"):
                _run_action(
                    lambda: build_delete_transaction().execute(txn.id, user),
                    "Transaction deleted.",
                )
            edit = _edit_form(
                txn,
                snapshot,
                form_key=f"edit-pending-{txn.id}",
                include_date=False,
            )
            if edit is not None:
                _save_pending_edit(txn.id, edit, user)

    approved = [txn for txn in transactions if txn.status == STATUS_APPROVED]
    if not approved:
        return
    st.subheader("Approved Transactions")
    by_id = {txn.id: txn for txn in approved}
    selected_id = st.selectbox(
        "Transaction",
        list(by_id),
        format_func=lambda txn_id: _transaction_summary(
            by_id[txn_id],
            snapshot,
        ),
    )
    selected = by_id[selected_id]
    edit = _edit_form(
        selected,
        snapshot,
        form_key=f"edit-approved-{selected.id}",
        include_date=True,
    )
    if edit is not None:
        _run_action(
            lambda: build_edit_approved_transaction().execute(
                selected.id,
                edit,
                user,
            ),
            "Transaction updated and reposted.",
        )
    if st.button("Delete transaction", key=f"delete-{selected.id}"):
        _run_action(
            lambda: build_delete_transaction().execute(selected.id, user),
            "Transaction deleted.",
        )


def _save_pending_edit(
    transaction_id: str,
    edit: TransactionEdit,
    user: CashieringUser | None,
) -> None:
    """Save a pending edit and patch the local copy without reloading."""
    try:
        updated = build_edit_pending_transaction().execute(
            transaction_id,
            edit,
            user,
        )
    except CashieringError as exc:
        st.error(str(exc))
        return
    except SQLAlchemyError as exc:
        st.error(f"Database error: {exc}")
        return
    overrides = dict(st.session_state.get(_OVERRIDES_KEY, {}))
    overrides[transaction_id] = updated
    st.session_state[_OVERRIDES_KEY] = overrides
    st.success("Pending transaction saved.")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Case Cashiering", layout="wide")
    st.title("Case Cashiering")

    page = st.sidebar.selectbox("Page", PAGES)

    try:
        snapshot = _load_snapshot(schema_version=1)
    except (RuntimeError, SQLAlchemyError) as exc:
        st.error(f"Could not connect to the cashiering database: {exc}")
        return

    if snapshot.has_blocking_error:
        st.error(
            "Could not load cases: "
            f"{snapshot.load_errors.get('cases', 'unknown error')}"
        )
        return
    for name, message in snapshot.load_errors.items():
        st.warning(f"Could not load {name.replace('_', ' ')}: {message}")

    flash = st.session_state.pop(_FLASH_KEY, None)
    if flash:
        st.success(flash)

    vat_control_code = CashieringSettings.from_env().vat_control_code
    if page == "Bank Accounts":
        _render_bank_accounts(snapshot, vat_control_code)
    elif page == "Bonding":
        _render_bonding(snapshot, vat_control_code)
    elif page == "Case Types":
        _render_case_types(snapshot)
    else:
        user = _select_user(snapshot)
        _render_pending_approvals(snapshot, user)


if __name__ == "__main__":  # pragma: no cover
    main()
