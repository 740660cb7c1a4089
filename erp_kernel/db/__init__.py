"""Database layer - engine and declarative base for the SQL collection store."""

from erp_kernel.db.base import Base, CollectionRow
from erp_kernel.db.engine import build_engine, create_tables, drop_tables, session_scope

__all__ = [
    "Base",
    "CollectionRow",
    "build_engine",
    "create_tables",
    "drop_tables",
    "session_scope",
]
