"""Durable collection store: backends, units of work, typed repositories."""

from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.memory import InMemoryStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.sql import SqlCollectionStore
from erp_kernel.store.unit_of_work import UnitOfWork

__all__ = [
    "CollectionStore",
    "Collections",
    "InMemoryStore",
    "Repository",
    "SqlCollectionStore",
    "UnitOfWork",
]
