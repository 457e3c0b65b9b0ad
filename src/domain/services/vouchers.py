"""Payment and receipt vouchers for approved transactions."""

from collections.abc import Iterable
from decimal import Decimal
from html import escape
import json
import re

from src.domain.constants import (
    PAYMENT,
    PRIMARY,
    VAT_PAYABLE_CODE,
    VAT_RECEIVABLE_CODE,
)
from src.domain.models import (
    CaseRecord,
    ChartOfAccountRecord,
    TransactionRecord,
    VoucherDocument,
)
from src.domain.services.classification import (
    ChartLookup,
    build_chart_lookup,
)
from src.domain.services.transactions import RECOVERABLE_ERRORS, parse_date
from src.utils.decimal_utils import coerce_decimal


PAYMENT_VOUCHER = "Payment Voucher"
RECEIPT_VOUCHER = "Receipt Voucher"

_UNKNOWN = "UNKNOWN"
_MONTHS = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)


def voucher_doc_type(txn: TransactionRecord) -> str:
    """Return the document type recorded for a transaction's voucher."""
    if txn.transaction_type == PAYMENT:
        return PAYMENT_VOUCHER
    return RECEIPT_VOUCHER


def voucher_filename(txn: TransactionRecord, case: CaseRecord) -> str:
    """Return the voucher file stem, e.g. ``PV-RC25-IPERA-19MAY2025``.

    Args:
        txn: Approved transaction.
        case: Case the transaction belongs to.

    Returns:
        str: Prefix, case reference, payee and date joined by hyphens.
    """
    prefix = "PV" if txn.transaction_type == PAYMENT else "RV"
    case_ref = (case.case_reference or "").strip() or _UNKNOWN
    payee = re.sub(r"[^a-zA-Z0-9]", "", txn.payee_name or "").upper()
    return f"{prefix}-{case_ref}-{payee or _UNKNOWN}-{_format_day(txn)}"


def _format_day(txn: TransactionRecord) -> str:
    try:
        parsed = parse_date(txn.transaction_date)
    except RECOVERABLE_ERRORS:
        return _UNKNOWN
    if parsed is None:
        return _UNKNOWN
    return f"{parsed.day:02d}{_MONTHS[parsed.month - 1]}{parsed.year}"


def voucher_metadata(txn: TransactionRecord) -> str:
    """Return the JSON payload stored alongside a voucher document."""
    payload = {
        "case_id": txn.case_id,
        "transaction_id": txn.id,
        "date_of_transaction": _as_text(txn.transaction_date),
        "date_of_invoice": None,
        "payee": txn.payee_name,
        "net": _as_text(txn.net_amount),
        "vat": _as_text(txn.vat_amount),
        "gross": _as_text(txn.amount),
        "description": txn.description,
        "account_code": txn.account_code,
        "invoice_number": txn.invoice_number,
        "reference": txn.reference,
    }
    return json.dumps(payload)


def _as_text(value) -> str | None:
    if value is None:
        return None
    return str(value)


def matches_voucher(document: VoucherDocument, txn: TransactionRecord) -> bool:
    """Return True when a stored document is the voucher of ``txn``.

    Documents of the other voucher type never match. Otherwise the
    transaction id in the stored metadata is checked first, then the
    reference and invoice number, then plain text and file URL search.
    """
    if document.doc_type != voucher_doc_type(txn):
        return False

    keys = [
        key.lower()
        for key in (txn.reference, txn.invoice_number)
        if key
    ]
    try:
        metadata = json.loads(document.raw_text or "")
    except ValueError:
        metadata = None
    if isinstance(metadata, dict):
        if metadata.get("transaction_id") == txn.id:
            return True
        for field_name in ("reference", "invoice_number"):
            value = metadata.get(field_name)
            if value and str(value).lower() in keys:
                return True

    for haystack in (document.raw_text or "", document.file_url or ""):
        lowered = haystack.lower()
        if txn.id and txn.id.lower() in lowered:
            return True
        if any(key in lowered for key in keys):
            return True
    return False


def render_voucher_html(
    txn: TransactionRecord,
    case: CaseRecord,
    chart: Iterable[ChartOfAccountRecord] | ChartLookup,
) -> str:
    """Return a printable HTML voucher for an approved transaction.

    Every value taken from the records is HTML-escaped.

    Args:
        txn: Transaction, normally after approval.
        case: Case the transaction belongs to.
        chart: Chart-of-accounts snapshot or lookup.

    Returns:
        str: Complete HTML document.
    """
    lookup = build_chart_lookup(chart)
    target = txn.resolved_target_account
    details = (
        case.bank_details if target == PRIMARY else case.secondary_bank_details
    )
    bank_code = case.bank_account_code(target) or "BANK001"
    bank_label = "Unknown Bank (Unknown Type)"
    if details is not None:
        bank_label = (
            f"{details.bank_name or 'Unknown Bank'} "
            f"({details.account_type or 'Unknown Type'})"
        )

    net = _amount(txn.net_amount)
    vat = _amount(txn.vat_amount)
    gross = _amount(txn.amount)
    account = lookup.get(txn.account_code)
    account_name = (
        account.account_name if account and account.account_name
        else txn.account_code or "Unknown Account"
    )

    zero = Decimal("0")
    if txn.transaction_type == PAYMENT:
        journal = [(account_name, txn.account_code, net, zero)]
        if vat > 0:
            journal.append(
                ("VAT on Purchases", VAT_RECEIVABLE_CODE, vat, zero)
            )
        journal.append(("Cash at Bank", bank_code, zero, gross))
    else:
        journal = [
            ("Cash at Bank", bank_code, gross, zero),
            (
                account_name,
                txn.account_code or _UNKNOWN,
                zero,
                net if vat > 0 else gross,
            ),
        ]
        if vat > 0:
            journal.append(("VAT on Sales", VAT_PAYABLE_CODE, zero, vat))

    total_debit = sum((line[2] for line in journal), zero)
    total_credit = sum((line[3] for line in journal), zero)
    journal_rows = "\n".join(
        "<tr>"
        f"<td>{escape(name)}</td><td>{escape(code or '')}</td>"
        f"<td class=\"num\">{_money(debit) if debit else ''}</td>"
        f"<td class=\"num\">{_money(credit) if credit else ''}</td>"
        "</tr>"
        for name, code, debit, credit in journal
    )

    details_rows = "\n".join(
        f"<tr><th>{escape(label)}</th><td>{escape(value)}</td></tr>"
        for label, value in (
            ("Case", f"{case.company_name} ({case.case_reference})"),
            ("Date", _display_date(txn.transaction_date)),
            ("Payee", txn.payee_name or ""),
            ("Description", txn.description or ""),
            ("Invoice number", txn.invoice_number or ""),
            ("Reference", txn.reference or ""),
            ("Bank account", bank_label),
            ("Net", _money(net)),
            ("VAT", _money(vat)),
            ("Gross", _money(gross)),
            ("Approved by", txn.approver_name or txn.approver_signed_by),
            ("Approver grade", txn.approver_grade or ""),
            ("Approved on", txn.approver_signed_date or ""),
        )
    )

    title = f"{voucher_doc_type(txn)} - {txn.reference or txn.id}"
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(title)}</title>
<style>
@page {{ size: A4 portrait; margin: 15mm; }}
body {{ font-family: Arial, sans-serif; font-size: 12px; }}
table {{ border-collapse: collapse; width: 100%; margin-bottom: 16px; }}
th, td {{ border: 1px solid #ccc; padding: 4px 8px; text-align: left; }}
td.num {{ text-align: right; }}
</style>
</head>
<body>
<h1>{escape(title)}</h1>
<table>
{details_rows}
</table>
<h2>Journal</h2>
<table>
<tr><th>Account</th><th>Code</th><th>Debit</th><th>Credit</th></tr>
{journal_rows}
<tr><th colspan="2">Total</th>
<td class="num">{_money(total_debit)}</td>
<td class="num">{_money(total_credit)}</td></tr>
</table>
</body>
</html>
"""


def _amount(value) -> Decimal:
    try:
        return coerce_decimal(value)
    except RECOVERABLE_ERRORS:
        return Decimal("0")


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


def _display_date(value) -> str:
    try:
        parsed = parse_date(value)
    except RECOVERABLE_ERRORS:
        return "Invalid Date"
    if parsed is None:
        return "N/A"
    return parsed.strftime("%d/%m/%Y")


__all__ = [
    "PAYMENT_VOUCHER",
    "RECEIPT_VOUCHER",
    "voucher_doc_type",
    "voucher_filename",
    "voucher_metadata",
    "matches_voucher",
    "render_voucher_html",
]
