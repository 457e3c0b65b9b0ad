"""Domain services package."""

from .aggregation import (
    build_case_aggregate,
    build_case_aggregates,
    compute_asset_realisations,
    compute_bonded_amount,
    compute_case_funds,
    search_case_aggregates,
)
from .bank_rows import flatten_all, flatten_to_rows
from .bonding import bonding_status, split_bonding_cases
from .classification import (
    build_chart_lookup,
    is_distribution_account,
    is_realisation_account,
)
from .ledger import build_double_entry_lines, double_entry_request
from .summary import summary_by_case_type
from .transactions import (
    compute_balance,
    compute_funds_distributed,
    filter_transactions,
    latest_bank_request_date,
    safe_sum,
)
from .validation import validate_for_posting, validate_transaction_edit
from .vat import vat_control_balance, vat_position
from .vouchers import (
    matches_voucher,
    render_voucher_html,
    voucher_doc_type,
    voucher_filename,
    voucher_metadata,
)

__all__ = [
    "build_case_aggregate",
    "build_case_aggregates",
    "compute_asset_realisations",
    "compute_bonded_amount",
    "compute_case_funds",
    "search_case_aggregates",
    "flatten_all",
    "flatten_to_rows",
    "bonding_status",
    "split_bonding_cases",
    "build_chart_lookup",
    "is_distribution_account",
    "is_realisation_account",
    "build_double_entry_lines",
    "double_entry_request",
    "summary_by_case_type",
    "compute_balance",
    "compute_funds_distributed",
    "filter_transactions",
    "latest_bank_request_date",
    "safe_sum",
    "validate_for_posting",
    "validate_transaction_edit",
    "vat_control_balance",
    "vat_position",
    "matches_voucher",
    "render_voucher_html",
    "voucher_doc_type",
    "voucher_filename",
    "voucher_metadata",
]
