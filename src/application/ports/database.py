"""Database ports for the finance valuation core.

This module defines the application-layer protocol for accessing the finance
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the finance database engine.

    Repositories depend on this protocol instead of concrete database
    drivers or configuration details.
    """

    def get_finance_engine(self) -> Engine:
        """Get the engine for the finance database.

        Returns:
            Engine: SQLAlchemy engine connected to the finance store.
        """


__all__ = ["DatabaseEnginePort"]
