"""Tests for the composition root."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy import create_engine, inspect

from src.application.use_cases import (
    ApproveTransactionUseCase,
    DeleteTransactionUseCase,
    EditApprovedTransactionUseCase,
    EditPendingTransactionUseCase,
    LoadCashieringSnapshotUseCase,
    RejectTransactionUseCase,
    UpdateCaseFundsUseCase,
)
from src.infrastructure import container
from src.infrastructure.cashiering_repository import (
    SqlAlchemyCashieringRepository,
)
from src.infrastructure.document_store import SqlAlchemyDocumentStore
from src.infrastructure.ledger_poster import SqlAlchemyLedgerPoster
from src.infrastructure.settings import CashieringSettings


def test_prepare_database_creates_tables(tmp_path) -> None:
    """Schema creation should run when auto_schema is enabled."""
    engine = create_engine(f"sqlite:///{tmp_path / 'container.sqlite'}")
    db_port = SimpleNamespace(get_cashiering_engine=lambda: engine)

    result = container.prepare_database(
        db_port=db_port,
        settings=CashieringSettings(voucher_storage_dir=tmp_path),
    )

    assert result is db_port
    assert {
        "cases",
        "transactions",
        "accounting_entries",
        "chart_of_accounts",
        "users",
        "documents",
    } <= set(inspect(engine).get_table_names())


def test_prepare_database_skips_schema_when_disabled(tmp_path) -> None:
    """No engine access should happen with auto_schema off."""
    db_port = MagicMock()

    container.prepare_database(
        db_port=db_port,
        settings=CashieringSettings(
            voucher_storage_dir=tmp_path,
            auto_schema=False,
        ),
    )

    db_port.get_cashiering_engine.assert_not_called()


def test_build_snapshot_loader_uses_case_limit(tmp_path) -> None:
    """The loader should carry the configured case limit."""
    loader = container.build_snapshot_loader(
        db_port=MagicMock(),
        settings=CashieringSettings(
            case_list_limit=25,
            voucher_storage_dir=tmp_path,
        ),
    )

    assert isinstance(loader, LoadCashieringSnapshotUseCase)
    assert isinstance(loader._repository, SqlAlchemyCashieringRepository)
    assert loader._case_limit == 25


def test_build_approve_transaction_wires_adapters(tmp_path) -> None:
    """Approval should use the SQL adapters and the voucher directory."""
    use_case = container.build_approve_transaction(
        db_port=MagicMock(),
        settings=CashieringSettings(voucher_storage_dir=tmp_path),
    )

    assert isinstance(use_case, ApproveTransactionUseCase)
    assert isinstance(use_case._documents, SqlAlchemyDocumentStore)
    assert use_case._documents._storage_dir == tmp_path
    assert isinstance(use_case._ledger, SqlAlchemyLedgerPoster)
    assert isinstance(use_case._funds_updater, UpdateCaseFundsUseCase)
    assert use_case._repository is use_case._writer


def test_build_mutation_use_cases(tmp_path) -> None:
    """Every mutation builder should return its use case."""
    db_port = MagicMock()
    settings = CashieringSettings(voucher_storage_dir=tmp_path)

    assert isinstance(
        container.build_reject_transaction(db_port),
        RejectTransactionUseCase,
    )
    assert isinstance(
        container.build_delete_transaction(db_port, settings),
        DeleteTransactionUseCase,
    )
    assert isinstance(
        container.build_edit_approved_transaction(db_port),
        EditApprovedTransactionUseCase,
    )
    assert isinstance(
        container.build_edit_pending_transaction(db_port),
        EditPendingTransactionUseCase,
    )
    assert isinstance(
        container.build_funds_updater(db_port),
        UpdateCaseFundsUseCase,
    )
