"""Domain constants for case cashiering."""

CASE_ACCOUNT = "case_account"

RECEIPT = "receipt"
PAYMENT = "payment"

PRIMARY = "primary"
SECONDARY = "secondary"

STATUS_DRAFT = "draft"
STATUS_PENDING = "pending_approval"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"

VAT_RECEIVABLE_CODE = "VAT001"
VAT_PAYABLE_CODE = "VAT002"
VAT_CONTROL_CODE = "VAT003"

# Compared lower-cased against the stored account group.
DISTRIBUTION_GROUPS = (
    "distributions",
    "unsecured creditors",
    "preferential creditors",
)

# Compared as stored (case-sensitive).
REALISATION_GROUPS = (
    "Asset Realisations",
    "Fixed Charge Realisations",
    "Floating Charge Realisations",
)

BONDING_EXCLUDED_CASE_TYPES = ("Advisory", "Receiverships")

NO_BANK_ACCOUNT_LABEL = "No Bank Accounts Configured"
DEFAULT_PRIMARY_LABEL = "GBP Primary"
DEFAULT_SECONDARY_LABEL = "GBP Trading"

POSTING_GRADE = "IP"


__all__ = [
    "CASE_ACCOUNT",
    "RECEIPT",
    "PAYMENT",
    "PRIMARY",
    "SECONDARY",
    "STATUS_DRAFT",
    "STATUS_PENDING",
    "STATUS_APPROVED",
    "STATUS_REJECTED",
    "VAT_RECEIVABLE_CODE",
    "VAT_PAYABLE_CODE",
    "VAT_CONTROL_CODE",
    "DISTRIBUTION_GROUPS",
    "REALISATION_GROUPS",
    "BONDING_EXCLUDED_CASE_TYPES",
    "NO_BANK_ACCOUNT_LABEL",
    "DEFAULT_PRIMARY_LABEL",
    "DEFAULT_SECONDARY_LABEL",
    "POSTING_GRADE",
]
