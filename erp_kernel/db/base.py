"""
Module: erp_kernel.db.base
Responsibility: Declarative base class for all SQLAlchemy ORM models, plus
    the single table the durable collection store needs.
Architecture position: Kernel > DB.  Lowest-level import target of the
    SQL backend.  MUST NOT import from store/, services/, domain/, or
    outer layers.

Invariants enforced:
    - One row per named collection (``name`` is the primary key).
    - ``version`` increases by exactly one on every write; the SQL store
      uses it for optimistic concurrency control.

Failure modes:
    - IntegrityError if two writers create the same collection row
      concurrently (surfaced by the store as OptimisticLockError).
"""

from datetime import datetime
from typing import ClassVar

from sqlalchemy import BigInteger, DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - datetime maps to DateTime(timezone=True) -- always timezone-aware.
        - int maps to BigInteger -- safe for monotonic versions.
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        int: BigInteger,
    }


class CollectionRow(Base):
    """
    A named collection persisted as one JSON array.

    Contract:
        ``payload`` is the JSON text of a list of records.  The store never
        stores partial collections: every write replaces the whole array
        and bumps ``version``.
    """

    __tablename__ = "erp_collections"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)

    payload: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    version: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
