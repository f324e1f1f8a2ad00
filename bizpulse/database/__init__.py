"""
Database Package
Handles database connection, session management, and base models.
"""

from bizpulse.database.connection import (
    async_engine,
    async_session_factory,
    init_db,
    close_db,
)
from bizpulse.database.base import Base, DocumentMixin, JSONDocument, TimestampMixin

__all__ = [
    # Connection
    "async_engine",
    "async_session_factory",
    "init_db",
    "close_db",
    # Base classes
    "Base",
    "DocumentMixin",
    "JSONDocument",
    "TimestampMixin",
]
