"""
Repository -- typed accessor over one collection inside a unit of work.

Responsibility:
    The only way module services read or change stored records.  Decodes
    records into frozen dataclasses on the way out and encodes them on the
    way in, marking the collection dirty so the unit of work writes it.

Architecture position:
    Kernel > Store.

Invariants enforced:
    - Every entity type stored through a repository has a string ``id``.
    - ``replace`` never appends: the id must already exist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar

from erp_kernel.exceptions import NotFoundError
from erp_kernel.store.codec import from_record, to_record

if TYPE_CHECKING:
    from erp_kernel.store.unit_of_work import UnitOfWork

T = TypeVar("T")


class Repository(Generic[T]):
    """Typed view of one named collection."""

    def __init__(self, uow: UnitOfWork, collection: str, entity_type: type[T], label: str):
        self._uow = uow
        self.collection = collection
        self._entity_type = entity_type
        self.label = label

    def _records(self) -> list[dict[str, Any]]:
        return self._uow.records(self.collection)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._records())

    def all(self) -> list[T]:
        return [from_record(self._entity_type, r) for r in self._records()]

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [e for e in self.all() if predicate(e)]

    def find(self, entity_id: str) -> T | None:
        for record in self._records():
            if record.get("id") == entity_id:
                return from_record(self._entity_type, record)
        return None

    def get(self, entity_id: str) -> T:
        entity = self.find(entity_id)
        if entity is None:
            raise NotFoundError(self.label, entity_id)
        return entity

    def exists(self, entity_id: str) -> bool:
        return any(r.get("id") == entity_id for r in self._records())

    def add(self, entity: T, *, prepend: bool = False) -> T:
        records = self._records()
        record = to_record(entity)
        if prepend:
            records.insert(0, record)
        else:
            records.append(record)
        self._uow.mark_dirty(self.collection)
        return entity

    def replace(self, entity: T) -> T:
        records = self._records()
        entity_id = getattr(entity, "id")
        for i, record in enumerate(records):
            if record.get("id") == entity_id:
                records[i] = to_record(entity)
                self._uow.mark_dirty(self.collection)
                return entity
        raise NotFoundError(self.label, entity_id)
