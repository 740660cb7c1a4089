"""
InMemoryStore -- process-local collection store.

Used by tests and by single-process deployments that do not need
durability across restarts.  Records are deep-copied on every read and
write so callers can never alias stored state.
"""

from __future__ import annotations

import copy
from typing import Any

from erp_kernel.exceptions import OptimisticLockError
from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import CollectionStore

logger = get_logger("store.memory")


class InMemoryStore(CollectionStore):
    """Dictionary-backed implementation of ``CollectionStore``."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None):
        super().__init__()
        self._data: dict[str, list[dict[str, Any]]] = {}
        self._versions: dict[str, int] = {}
        for name, records in (initial or {}).items():
            self._data[name] = copy.deepcopy(records)
            self._versions[name] = 1

    def read(self, name: str) -> tuple[list[dict[str, Any]], int]:
        with self._lock:
            return copy.deepcopy(self._data.get(name, [])), self._versions.get(name, 0)

    def write_many(
        self,
        changes: dict[str, list[dict[str, Any]]],
        expected_versions: dict[str, int],
    ) -> None:
        with self._lock:
            for name in changes:
                actual = self._versions.get(name, 0)
                expected = expected_versions.get(name, actual)
                if actual != expected:
                    raise OptimisticLockError(name, expected, actual)
            for name, records in changes.items():
                self._data[name] = copy.deepcopy(records)
                self._versions[name] = self._versions.get(name, 0) + 1
        logger.debug("collections_written", extra={"collections": sorted(changes)})
