"""Application ports package."""

from .cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from .database import DatabaseEnginePort
from .documents import DocumentStorePort
from .ledger import LedgerPostingPort

__all__ = [
    "CashieringRepositoryPort",
    "CashieringWriterPort",
    "DatabaseEnginePort",
    "DocumentStorePort",
    "LedgerPostingPort",
]
