"""
ChangePlan -- plan-then-commit helper for multi-record operations.

Responsibility:
    Makes the all-or-nothing guarantee of multi-record operations
    structural.  An operation first *plans*: it registers every check and
    every mutation.  ``commit()`` then runs ALL checks; only if every check
    passes are the staged mutations applied, in registration order.

Architecture position:
    Kernel > Domain -- pure, no I/O.  Mutations usually target working
    copies held by a ``UnitOfWork``, so a plan that fails leaves nothing
    to roll back and a plan that commits is persisted by the unit of work.

Invariants enforced:
    - No staged mutation runs unless every check has passed.
    - A plan commits at most once.

Failure modes:
    - The first failing check's exception propagates unchanged.
    - ``RuntimeError`` on a second ``commit()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from erp_kernel.logging_config import get_logger

logger = get_logger("domain.plan")


@dataclass(frozen=True)
class PlannedStep:
    """A named check or mutation registered on a plan."""
    description: str
    run: Callable[[], None]


class ChangePlan:
    """
    Two-phase (validate all, then mutate all) change set.

    Usage::

        plan = ChangePlan("complete_production")
        plan.check("stock available", lambda: ensure_stock(...))
        plan.stage("consume raw material", lambda: products.replace(...))
        plan.commit()
    """

    def __init__(self, operation: str):
        self.operation = operation
        self._checks: list[PlannedStep] = []
        self._steps: list[PlannedStep] = []
        self._committed = False

    def check(self, description: str, check: Callable[[], None]) -> "ChangePlan":
        """Register a validation. It must raise to reject the plan."""
        self._checks.append(PlannedStep(description, check))
        return self

    def stage(self, description: str, mutation: Callable[[], None]) -> "ChangePlan":
        """Register a mutation to run after every check has passed."""
        self._steps.append(PlannedStep(description, mutation))
        return self

    @property
    def step_count(self) -> int:
        return len(self._steps)

    def validate(self) -> None:
        """Run every registered check without applying anything."""
        for step in self._checks:
            try:
                step.run()
            except Exception:
                logger.warning(
                    "plan_check_failed",
                    extra={"operation": self.operation, "check": step.description},
                )
                raise

    def commit(self) -> None:
        if self._committed:
            raise RuntimeError(f"Plan {self.operation} already committed")
        self.validate()
        self._committed = True
        for step in self._steps:
            step.run()
        logger.debug(
            "plan_committed",
            extra={
                "operation": self.operation,
                "checks": len(self._checks),
                "steps": len(self._steps),
            },
        )
