"""Database ports for the cashiering dashboard.

This module defines the application-layer protocol for accessing the
cashiering database engine. Infrastructure implementations are expected to
provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the cashiering database.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_cashiering_engine(self) -> Engine:
        """Get the engine for the cashiering database.

        Returns:
            Engine: SQLAlchemy engine connected to the cashiering store.
        """


__all__ = ["DatabaseEnginePort"]
