"""
CollectionStore -- durable get/put of named JSON collections.

Responsibility:
    Persists one JSON array of records per entity kind and hands out
    units of work that read, mutate and write those arrays as a single
    critical section.

Architecture position:
    Kernel > Store.  Backends (``InMemoryStore``, ``SqlCollectionStore``)
    implement ``read`` and ``write_many``; everything else lives here.

Invariants enforced:
    - ``write_many`` is atomic across every collection it names.
    - ``transaction()`` holds the store's writer lock from the first read
      to the final write: overlapping read-modify-write sequences are
      serialised (single-writer semantics).
    - A ``transaction()`` block that raises persists nothing.
    - A ``transaction()`` opened while another is active on the same
      thread joins it; only the outermost block commits.

Failure modes:
    - ``OptimisticLockError`` from ``write_many`` when a collection's
      version moved since it was read (possible only with several
      processes sharing one SQL database).
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

from erp_kernel.logging_config import get_logger
from erp_kernel.store.unit_of_work import UnitOfWork

logger = get_logger("store")


class Collections:
    """Well-known collection names."""

    PRODUCTS = "products"
    PARTNERS = "partners"
    PURCHASE_REQUESTS = "purchase-requests"
    PURCHASE_ORDERS = "purchase-orders"
    SALES_ORDERS = "sales-orders"
    TRANSACTIONS = "transactions"
    EMPLOYEES = "employees"
    BOMS = "boms"
    PRODUCTION_ORDERS = "production-orders"
    PAYROLL_RUNS = "payroll-runs"
    SEQUENCES = "sequences"

    ALL = (
        PRODUCTS,
        PARTNERS,
        PURCHASE_REQUESTS,
        PURCHASE_ORDERS,
        SALES_ORDERS,
        TRANSACTIONS,
        EMPLOYEES,
        BOMS,
        PRODUCTION_ORDERS,
        PAYROLL_RUNS,
        SEQUENCES,
    )


class CollectionStore(ABC):
    """
    Abstract durable key-value store of named collections.

    Contract:
        Backends return independent copies from ``read``: mutating a
        returned list never changes stored state.  A collection that was
        never written reads as ``([], 0)``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._active = threading.local()

    @abstractmethod
    def read(self, name: str) -> tuple[list[dict[str, Any]], int]:
        """Return (records, version) for ``name``."""
        ...

    @abstractmethod
    def write_many(
        self,
        changes: dict[str, list[dict[str, Any]]],
        expected_versions: dict[str, int],
    ) -> None:
        """Replace every named collection atomically, bumping versions."""
        ...

    # -- plain get/put -------------------------------------------------------

    def get(self, name: str) -> list[dict[str, Any]]:
        return self.read(name)[0]

    def put(self, name: str, records: list[dict[str, Any]]) -> None:
        with self._lock:
            _, version = self.read(name)
            self.write_many({name: records}, {name: version})

    def is_empty(self, name: str) -> bool:
        return not self.read(name)[0]

    # -- units of work -------------------------------------------------------

    @contextmanager
    def transaction(self, operation: str = "unit_of_work") -> Iterator[UnitOfWork]:
        """
        Open a unit of work.

        Usage::

            with store.transaction("create_sales_order") as uow:
                products = uow.repository(Collections.PRODUCTS, Product, "Product")
                ...
            # committed here; an exception inside the block commits nothing
        """
        current: UnitOfWork | None = getattr(self._active, "uow", None)
        if current is not None:
            yield current
            return

        with self._lock:
            uow = UnitOfWork(self, operation)
            self._active.uow = uow
            try:
                yield uow
            except Exception:
                uow.discard()
                logger.debug("unit_of_work_discarded", extra={"operation": operation})
                raise
            else:
                uow.commit()
            finally:
                self._active.uow = None
