"""
Pure domain layer.

Value normalisation, workflow tables, the plan-then-commit helper and the
clock abstraction.  NO dependencies on the store, SQLAlchemy, or I/O.
"""

from erp_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import line_total, require_text, to_amount, to_quantity
from erp_kernel.domain.workflow import Guard, Transition, Workflow, apply_action

__all__ = [
    "ChangePlan",
    "Clock",
    "DeterministicClock",
    "Guard",
    "SystemClock",
    "Transition",
    "Workflow",
    "apply_action",
    "line_total",
    "require_text",
    "to_amount",
    "to_quantity",
]
