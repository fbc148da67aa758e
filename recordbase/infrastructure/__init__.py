"""
Infrastructure package for recordbase.

Centralizes database connectivity: the storage service contract, the psycopg
implementation of it, and connection/pool factories. The mapping layer only
depends on the contract.
"""

from recordbase.infrastructure.abstract import StorageService
from recordbase.infrastructure.database import Database, get_database
from recordbase.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_sync_connection,
)

__all__ = [
    "Database",
    "PoolManager",
    "StorageService",
    "build_dsn",
    "get_database",
    "get_sync_connection",
]
