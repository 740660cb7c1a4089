"""
SequenceService -- monotonic id allocation owned by the store.

Responsibility:
    Provides strictly increasing, collision-free identifiers for every
    entity kind.  Counters live in the ``sequences`` collection and are
    read and written through the caller's unit of work.

Architecture position:
    Kernel > Services.  Called by every module service that creates
    entities.

Invariants enforced:
    - Sequence monotonicity: each call returns a value strictly greater
      than any previously committed value for that prefix.  The
      "max existing id plus one" approach is never used; the counter row
      is the sole source of truth.
    - Transactional: the increment is only visible once the caller's unit
      of work commits.  A failed operation consumes no id.

Audit relevance:
    Allocation is logged at DEBUG level with sequence name and value.
"""

from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import Collections
from erp_kernel.store.unit_of_work import UnitOfWork

logger = get_logger("services.sequence")


class SequenceService:
    """
    Service for generating transactional sequence numbers.

    Usage:
        with store.transaction() as uow:
            so_id = SequenceService(uow).next_id(SequenceService.SALES_ORDER)
            # "SO-000001"; discarded if the unit of work fails
    """

    # Well-known sequence prefixes
    PRODUCT = "PRD"
    PARTNER = "PTN"
    PURCHASE_REQUEST = "PR"
    PURCHASE_ORDER = "PO"
    SALES_ORDER = "SO"
    TRANSACTION = "TX"
    EMPLOYEE = "EMP"
    BOM = "BOM"
    PRODUCTION_ORDER = "MFG"
    PAYROLL_RUN = "PAY"

    WIDTH = 6

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def next_value(self, sequence_name: str) -> int:
        """
        Get the next value for a named sequence.

        Postconditions:
            - Returns an integer > 0 strictly greater than any previously
              committed value for this sequence name.
        """
        counters = self._uow.records(Collections.SEQUENCES)
        for counter in counters:
            if counter["name"] == sequence_name:
                counter["currentValue"] += 1
                value = counter["currentValue"]
                break
        else:
            value = 1
            counters.append({"name": sequence_name, "currentValue": value})

        assert value > 0, "sequence value must be strictly positive"
        self._uow.mark_dirty(Collections.SEQUENCES)
        logger.debug(
            "sequence_allocated",
            extra={"sequence_name": sequence_name, "value": value},
        )
        return value

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{self.next_value(prefix):0{self.WIDTH}d}"

    def current_value(self, sequence_name: str) -> int | None:
        for counter in self._uow.records(Collections.SEQUENCES):
            if counter["name"] == sequence_name:
                return counter["currentValue"]
        return None
