"""
Canonical workflow types (``erp_kernel.domain.workflow``).

Responsibility
--------------
Pure value objects for document state machines.  Used by every module with
a lifecycle (purchase requests, purchase orders, sales orders, production
orders, employees) so that Guard, Transition, and Workflow are defined once
and a status change is only ever applied when the transition table allows
it.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.  No imports
from ``db/``, ``store/``, ``services/``, or outer layers.

Invariants enforced
-------------------
* Transitions reference only states in ``Workflow.states``.
* ``initial_state`` is a member of ``states``.
* ``apply_action`` raises ``InvalidStateTransitionError`` for any
  (state, action) pair absent from the table.
"""

from __future__ import annotations

from dataclasses import dataclass

from erp_kernel.exceptions import InvalidStateTransitionError


@dataclass(frozen=True)
class Guard:
    """A condition that must be satisfied before a transition fires.

    Contract: frozen, descriptive only.
    Non-goals: does not evaluate the condition -- the owning service does.
    """
    name: str
    description: str


@dataclass(frozen=True)
class Transition:
    """A valid state transition in a workflow.

    Contract: frozen.  ``posts_entry=True`` indicates the transition appends
    a ledger transaction; ``moves_stock=True`` indicates it changes product
    stock.
    """
    from_state: str
    to_state: str
    action: str
    guard: Guard | None = None
    posts_entry: bool = False
    moves_stock: bool = False


@dataclass(frozen=True)
class Workflow:
    """A state machine definition for a document lifecycle.

    Contract: frozen; ``transitions`` reference only states in ``states``.
    ``terminal_states`` are states with no outgoing transitions.
    """
    name: str
    description: str
    initial_state: str
    states: tuple[str, ...]
    transitions: tuple[Transition, ...]
    terminal_states: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.initial_state not in self.states:
            raise ValueError(
                f"Workflow {self.name}: initial state "
                f"'{self.initial_state}' not in states"
            )
        for t in self.transitions:
            if t.from_state not in self.states or t.to_state not in self.states:
                raise ValueError(
                    f"Workflow {self.name}: transition {t.action} "
                    f"references unknown state"
                )

    def find_transition(self, current_state: str, action: str) -> Transition | None:
        """Find the transition for ``action`` out of ``current_state``."""
        for t in self.transitions:
            if t.from_state == current_state and t.action == action:
                return t
        return None

    def allowed_actions(self, current_state: str) -> tuple[str, ...]:
        return tuple(
            t.action for t in self.transitions if t.from_state == current_state
        )

    def is_terminal(self, state: str) -> bool:
        return state in self.terminal_states


def apply_action(
    workflow: Workflow,
    current_state: str,
    action: str,
    *,
    entity_type: str,
    entity_id: str,
) -> Transition:
    """Resolve ``action`` against the transition table.

    Returns the matching Transition; the caller applies ``to_state``.

    Raises:
        InvalidStateTransitionError: if no transition exists for the
            (current_state, action) pair.
    """
    transition = workflow.find_transition(current_state, action)
    if transition is None:
        raise InvalidStateTransitionError(
            entity_type=entity_type,
            entity_id=entity_id,
            current_state=current_state,
            action=action,
        )
    return transition
