"""Tests for the filesystem voucher store."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from src.infrastructure.document_store import SqlAlchemyDocumentStore
from src.infrastructure.schema import ensure_schema


@pytest.fixture
def store(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'documents.sqlite'}")
    ensure_schema(engine)
    db_port = SimpleNamespace(get_cashiering_engine=lambda: engine)
    return SqlAlchemyDocumentStore(
        db_port,
        tmp_path / "vouchers",
        logger=MagicMock(),
    )


def test_store_voucher_writes_file_and_record(store, tmp_path):
    """Vouchers should land in the case folder and be listed."""
    document = store.store_voucher(
        "case-1",
        "PV-RC25-AGENT-19MAY2025",
        "<html></html>",
        "Payment Voucher",
        '{"transaction_id": "t1"}',
    )

    path = tmp_path / "vouchers" / "case-1" / "PV-RC25-AGENT-19MAY2025.html"
    assert path.read_text(encoding="utf-8") == "<html></html>"
    assert document.file_url == path.resolve().as_uri()
    assert store.fetch_case_documents("case-1") == [document]
    assert store.fetch_case_documents("case-2") == []


def test_store_voucher_does_not_overwrite_existing_files(store, tmp_path):
    """A second voucher with the same name should get a suffix."""
    first = store.store_voucher("case-1", "RV-X", "one", "Receipt Voucher", "")
    second = store.store_voucher("case-1", "RV-X", "two", "Receipt Voucher", "")

    assert first.file_url.endswith("/RV-X.html")
    assert second.file_url.endswith("/RV-X_1.html")
    assert (tmp_path / "vouchers" / "case-1" / "RV-X.html").read_text(
        encoding="utf-8"
    ) == "one"


def test_delete_document_removes_record_and_file(store, tmp_path):
    """Deleting should drop both the row and the stored file."""
    document = store.store_voucher("case-1", "RV-X", "one", "Receipt Voucher", "")

    store.delete_document(document.id)

    assert store.fetch_case_documents("case-1") == []
    assert not (tmp_path / "vouchers" / "case-1" / "RV-X.html").exists()


def test_delete_unknown_document_logs_warning(store):
    """Unknown ids should be logged and ignored."""
    store.delete_document("missing")

    store._logger.warning.assert_called_once()
