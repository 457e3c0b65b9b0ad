"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.use_cases.approve_transaction import (
    ApproveTransactionUseCase,
)
from src.application.use_cases.delete_transaction import (
    DeleteTransactionUseCase,
)
from src.application.use_cases.edit_transaction import (
    EditApprovedTransactionUseCase,
    EditPendingTransactionUseCase,
)
from src.application.use_cases.load_snapshot import (
    LoadCashieringSnapshotUseCase,
)
from src.application.use_cases.reject_transaction import (
    RejectTransactionUseCase,
)
from src.application.use_cases.update_case_funds import (
    UpdateCaseFundsUseCase,
)
from src.infrastructure.cashiering_repository import (
    SqlAlchemyCashieringRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.document_store import SqlAlchemyDocumentStore
from src.infrastructure.ledger_poster import SqlAlchemyLedgerPoster
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.schema import ensure_schema
from src.infrastructure.settings import CashieringSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def prepare_database(
    db_port: DatabaseEnginePort | None = None,
    settings: CashieringSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter, creating tables when enabled."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or CashieringSettings.from_env()
    if resolved_settings.auto_schema:
        ensure_schema(resolved_db.get_cashiering_engine())
    return resolved_db


def build_cashiering_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyCashieringRepository:
    """Return the repository implementing the read and write ports."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyCashieringRepository(resolved_db, logger=get_app_logger())


def build_snapshot_loader(
    db_port: DatabaseEnginePort | None = None,
    settings: CashieringSettings | None = None,
) -> LoadCashieringSnapshotUseCase:
    """Return the snapshot loader honouring the configured case limit."""
    resolved_settings = settings or CashieringSettings.from_env()
    return LoadCashieringSnapshotUseCase(
        build_cashiering_repository(db_port),
        case_limit=resolved_settings.case_list_limit,
    )


def build_funds_updater(
    db_port: DatabaseEnginePort | None = None,
) -> UpdateCaseFundsUseCase:
    """Return the case funds write-back use case."""
    repository = build_cashiering_repository(db_port)
    return UpdateCaseFundsUseCase(repository, repository)


def build_approve_transaction(
    db_port: DatabaseEnginePort | None = None,
    settings: CashieringSettings | None = None,
) -> ApproveTransactionUseCase:
    """Return the approval use case wired to SQLAlchemy adapters."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or CashieringSettings.from_env()
    repository = build_cashiering_repository(resolved_db)
    return ApproveTransactionUseCase(
        repository,
        repository,
        SqlAlchemyDocumentStore(
            resolved_db,
            resolved_settings.voucher_storage_dir,
        ),
        SqlAlchemyLedgerPoster(resolved_db),
        UpdateCaseFundsUseCase(repository, repository),
    )


def build_reject_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> RejectTransactionUseCase:
    """Return the rejection use case."""
    return RejectTransactionUseCase(build_cashiering_repository(db_port))


def build_delete_transaction(
    db_port: DatabaseEnginePort | None = None,
    settings: CashieringSettings | None = None,
) -> DeleteTransactionUseCase:
    """Return the deletion use case."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or CashieringSettings.from_env()
    repository = build_cashiering_repository(resolved_db)
    return DeleteTransactionUseCase(
        repository,
        repository,
        SqlAlchemyDocumentStore(
            resolved_db,
            resolved_settings.voucher_storage_dir,
        ),
        UpdateCaseFundsUseCase(repository, repository),
    )


def build_edit_approved_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> EditApprovedTransactionUseCase:
    """Return the use case editing approved transactions."""
    resolved_db = db_port or build_database_adapter()
    repository = build_cashiering_repository(resolved_db)
    return EditApprovedTransactionUseCase(
        repository,
        repository,
        SqlAlchemyLedgerPoster(resolved_db),
        UpdateCaseFundsUseCase(repository, repository),
    )


def build_edit_pending_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> EditPendingTransactionUseCase:
    """Return the use case editing pending transactions."""
    repository = build_cashiering_repository(db_port)
    return EditPendingTransactionUseCase(repository, repository)


__all__ = [
    "build_database_adapter",
    "prepare_database",
    "build_cashiering_repository",
    "build_snapshot_loader",
    "build_funds_updater",
    "build_approve_transaction",
    "build_reject_transaction",
    "build_delete_transaction",
    "build_edit_approved_transaction",
    "build_edit_pending_transaction",
]
