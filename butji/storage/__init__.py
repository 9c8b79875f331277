"""Storage layer: connection pool and schema management."""

from butji.storage.database import Database
from butji.storage.schema import create_tables

__all__ = ["Database", "create_tables"]
