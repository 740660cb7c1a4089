"""
SqlCollectionStore -- durable collection store on SQLAlchemy.

Responsibility:
    Persists each collection as one ``erp_collections`` row holding the
    JSON array text and a version counter.

Architecture position:
    Kernel > Store.  Depends on ``erp_kernel.db`` for the ORM row and
    session scope.

Invariants enforced:
    - ``write_many`` runs in ONE database transaction: either every named
      collection is replaced or none is.
    - Optimistic concurrency: each row is re-read ``FOR UPDATE`` and its
      version compared with the version the unit of work saw.  The writer
      lock already serialises writers inside one process; the version
      check covers several processes sharing a database.

Failure modes:
    - ``OptimisticLockError`` on version mismatch or a concurrent insert of
      the same collection row.  Nothing is written.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from erp_kernel.db.base import CollectionRow
from erp_kernel.db.engine import session_scope
from erp_kernel.exceptions import OptimisticLockError
from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import CollectionStore

logger = get_logger("store.sql")


class SqlCollectionStore(CollectionStore):
    """
    SQLAlchemy implementation of ``CollectionStore``.

    Usage::

        engine = build_engine("sqlite:///erp.db")
        create_tables(engine)
        store = SqlCollectionStore(sessionmaker(bind=engine, expire_on_commit=False))
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        super().__init__()
        self._session_factory = session_factory

    def read(self, name: str) -> tuple[list[dict[str, Any]], int]:
        with session_scope(self._session_factory) as session:
            row = session.get(CollectionRow, name)
            if row is None:
                return [], 0
            return json.loads(row.payload), row.version

    def write_many(
        self,
        changes: dict[str, list[dict[str, Any]]],
        expected_versions: dict[str, int],
    ) -> None:
        pending_name: str | None = None
        try:
            with session_scope(self._session_factory) as session:
                for name, records in changes.items():
                    pending_name = name
                    self._write_one(session, name, records, expected_versions.get(name))
                    session.flush()
        except IntegrityError:
            # Another process created the row between our read and insert
            logger.warning("collection_insert_race", extra={"collection": pending_name})
            raise OptimisticLockError(pending_name or "?", 0, -1) from None

        logger.debug("collections_written", extra={"collections": sorted(changes)})

    @staticmethod
    def _write_one(
        session: Session,
        name: str,
        records: list[dict[str, Any]],
        expected: int | None,
    ) -> None:
        row = session.execute(
            select(CollectionRow)
            .where(CollectionRow.name == name)
            .with_for_update()
        ).scalar_one_or_none()

        actual = row.version if row is not None else 0
        if expected is not None and actual != expected:
            raise OptimisticLockError(name, expected, actual)

        payload = json.dumps(records, separators=(",", ":"))
        if row is None:
            session.add(CollectionRow(name=name, payload=payload, version=1))
        else:
            row.payload = payload
            row.version = actual + 1
