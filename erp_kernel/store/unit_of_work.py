"""
UnitOfWork -- working copies of collections, written back together.

Responsibility:
    Lazily loads a working copy of each collection an operation touches,
    tracks which ones were modified, and writes every modified collection
    in one ``write_many`` call on commit.

Architecture position:
    Kernel > Store.  Created only by ``CollectionStore.transaction()``.

Invariants enforced:
    - Each collection is read at most once per unit of work; the version
      seen at that read is the one checked on write.
    - After ``discard()`` or ``commit()`` the unit of work is closed and
      refuses further use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from erp_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from erp_kernel.store.base import CollectionStore
    from erp_kernel.store.repository import Repository

logger = get_logger("store.unit_of_work")

T = TypeVar("T")


class UnitOfWork:
    """One operation's view of the store."""

    def __init__(self, store: CollectionStore, operation: str):
        self._store = store
        self.operation = operation
        self._working: dict[str, list[dict[str, Any]]] = {}
        self._versions: dict[str, int] = {}
        self._dirty: set[str] = set()
        self._closed = False

    def records(self, name: str) -> list[dict[str, Any]]:
        """Working copy of collection ``name`` (loaded on first access)."""
        self._ensure_open()
        if name not in self._working:
            records, version = self._store.read(name)
            self._working[name] = records
            self._versions[name] = version
        return self._working[name]

    def mark_dirty(self, name: str) -> None:
        self._ensure_open()
        if name not in self._working:
            raise RuntimeError(f"Collection {name} was not loaded in this unit of work")
        self._dirty.add(name)

    def repository(self, name: str, entity_type: type[T], label: str) -> Repository[T]:
        from erp_kernel.store.repository import Repository

        return Repository(self, name, entity_type, label)

    @property
    def dirty_collections(self) -> frozenset[str]:
        return frozenset(self._dirty)

    def commit(self) -> None:
        self._ensure_open()
        self._closed = True
        if not self._dirty:
            return
        changes = {name: self._working[name] for name in sorted(self._dirty)}
        versions = {name: self._versions[name] for name in changes}
        self._store.write_many(changes, versions)
        logger.debug(
            "unit_of_work_committed",
            extra={"operation": self.operation, "collections": sorted(changes)},
        )

    def discard(self) -> None:
        self._closed = True
        self._working.clear()
        self._dirty.clear()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"Unit of work {self.operation} is closed")
