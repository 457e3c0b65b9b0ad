"""Port for storing voucher documents."""

from typing import Protocol

from src.domain.models import VoucherDocument


class DocumentStorePort(Protocol):
    """Port exposing voucher storage for a case."""

    def store_voucher(
        self,
        case_id: str,
        filename: str,
        content: str,
        doc_type: str,
        raw_text: str,
    ) -> VoucherDocument:
        """Upload a voucher file and record it against the case.

        Args:
            case_id: Case the voucher belongs to.
            filename: File stem, without extension.
            content: Rendered HTML voucher.
            doc_type: "Payment Voucher" or "Receipt Voucher".
            raw_text: JSON metadata stored with the document.

        Returns:
            VoucherDocument: Stored document record.
        """

    def fetch_case_documents(self, case_id: str) -> list[VoucherDocument]:
        """Return every document recorded against a case."""

    def delete_document(self, document_id: str) -> None:
        """Delete a document record and its file."""


__all__ = ["DocumentStorePort"]
