"""Voucher storage on the local filesystem with a documents table."""

from datetime import datetime, timezone
from pathlib import Path
import uuid

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.documents import DocumentStorePort
from src.domain.models import VoucherDocument
from src.infrastructure.logging.logger import get_app_logger


INSERT_DOCUMENT_SQL = text(
    """
    INSERT INTO documents (id, case_id, doc_type, file_url, raw_text, created_date)
    VALUES (:id, :case_id, :doc_type, :file_url, :raw_text, :created_date)
    """
)

SELECT_CASE_DOCUMENTS_SQL = text(
    """
    SELECT id, case_id, doc_type, file_url, raw_text
    FROM documents
    WHERE case_id = :case_id
    ORDER BY created_date, id
    """
)

SELECT_DOCUMENT_SQL = text("SELECT file_url FROM documents WHERE id = :id")

DELETE_DOCUMENT_SQL = text("DELETE FROM documents WHERE id = :id")


class SqlAlchemyDocumentStore(DocumentStorePort):
    """Write voucher HTML files and record them in ``documents``.

    Files live under ``<storage_dir>/<case_id>/``; ``file_url`` is the
    file URI.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        storage_dir: Path,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the cashiering engine.
            storage_dir: Directory receiving voucher files.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._storage_dir = Path(storage_dir)
        self._logger = logger or get_app_logger()

    def store_voucher(
        self,
        case_id: str,
        filename: str,
        content: str,
        doc_type: str,
        raw_text: str,
    ) -> VoucherDocument:
        case_dir = self._storage_dir / case_id
        case_dir.mkdir(parents=True, exist_ok=True)
        path = self._unique_path(case_dir, filename)
        path.write_text(content, encoding="utf-8")

        document = VoucherDocument(
            id=uuid.uuid4().hex,
            case_id=case_id,
            doc_type=doc_type,
            file_url=path.resolve().as_uri(),
            raw_text=raw_text,
        )
        engine = self._db_port.get_cashiering_engine()
        with engine.begin() as conn:
            conn.execute(
                INSERT_DOCUMENT_SQL,
                {
                    "id": document.id,
                    "case_id": document.case_id,
                    "doc_type": document.doc_type,
                    "file_url": document.file_url,
                    "raw_text": document.raw_text,
                    "created_date": datetime.now(timezone.utc).isoformat(),
                },
            )
        self._logger.info(f"Stored {doc_type} {path.name} for case {case_id}")
        return document

    def fetch_case_documents(self, case_id: str) -> list[VoucherDocument]:
        engine = self._db_port.get_cashiering_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_CASE_DOCUMENTS_SQL,
                {"case_id": case_id},
            ).all()
        return [
            VoucherDocument(
                id=row.id,
                case_id=row.case_id,
                doc_type=row.doc_type or "",
                file_url=row.file_url or "",
                raw_text=row.raw_text or "",
            )
            for row in rows
        ]

    def delete_document(self, document_id: str) -> None:
        engine = self._db_port.get_cashiering_engine()
        with engine.begin() as conn:
            row = conn.execute(SELECT_DOCUMENT_SQL, {"id": document_id}).first()
            conn.execute(DELETE_DOCUMENT_SQL, {"id": document_id})
        if row is None:
            self._logger.warning(f"Document {document_id} not found")
            return
        path = self._local_path(row.file_url)
        if path is not None:
            path.unlink(missing_ok=True)
        self._logger.info(f"Deleted document {document_id}")

    def _local_path(self, file_url: str | None) -> Path | None:
        """Return the stored file for a URL inside the storage directory."""
        prefix = "file://"
        if not file_url or not file_url.startswith(prefix):
            return None
        root = self._storage_dir.resolve()
        for path in root.rglob("*.html"):
            if path.as_uri() == file_url:
                return path
        return None

    @staticmethod
    def _unique_path(directory: Path, stem: str) -> Path:
        path = directory / f"{stem}.html"
        counter = 1
        while path.exists():
            path = directory / f"{stem}_{counter}.html"
            counter += 1
        return path


__all__ = ["SqlAlchemyDocumentStore"]
