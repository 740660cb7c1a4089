"""
Procurement Workflows.

State machines for purchase requests and purchase orders.
"""

from erp_kernel.domain.workflow import Guard, Transition, Workflow
from erp_kernel.logging_config import get_logger
from erp_modules.procurement.models import POStatus, PRStatus

logger = get_logger("modules.procurement.workflows")


# -----------------------------------------------------------------------------
# Guards
# -----------------------------------------------------------------------------

APPROVAL_WAIVED = Guard(
    name="approval_waived",
    description="Configuration allows converting a request that was never approved",
)

SUPPLIER_NAMED = Guard(
    name="supplier_named",
    description="A supplier has been chosen for the order",
)

logger.info(
    "procurement_workflow_guards_defined",
    extra={"guards": [APPROVAL_WAIVED.name, SUPPLIER_NAMED.name]},
)


# -----------------------------------------------------------------------------
# Purchase Request Workflow
# -----------------------------------------------------------------------------

_PENDING = PRStatus.PENDING.value
_APPROVED = PRStatus.APPROVED.value
_REJECTED = PRStatus.REJECTED.value
_CONVERTED = PRStatus.CONVERTED_TO_PO.value

REQUISITION_WORKFLOW = Workflow(
    name="purchase_request",
    description="Purchase request approval and conversion",
    initial_state=_PENDING,
    states=(_PENDING, _APPROVED, _REJECTED, _CONVERTED),
    transitions=(
        Transition(_PENDING, _APPROVED, action="approve"),
        Transition(_PENDING, _REJECTED, action="reject"),
        Transition(_APPROVED, _CONVERTED, action="convert_to_po", guard=SUPPLIER_NAMED),
        Transition(_PENDING, _CONVERTED, action="convert_to_po", guard=APPROVAL_WAIVED),
    ),
    terminal_states=(_REJECTED, _CONVERTED),
)

logger.info(
    "purchase_request_workflow_registered",
    extra={
        "workflow_name": REQUISITION_WORKFLOW.name,
        "state_count": len(REQUISITION_WORKFLOW.states),
        "transition_count": len(REQUISITION_WORKFLOW.transitions),
    },
)


# -----------------------------------------------------------------------------
# Purchase Order Workflow
# -----------------------------------------------------------------------------

PURCHASE_ORDER_WORKFLOW = Workflow(
    name="purchase_order",
    description="Purchase order dispatch and goods receipt",
    initial_state=POStatus.SENT.value,
    states=tuple(s.value for s in POStatus),
    transitions=(
        Transition(POStatus.PENDING.value, POStatus.SENT.value, action="send"),
        Transition(POStatus.SENT.value, POStatus.COMPLETED.value, action="receive", moves_stock=True),
    ),
    terminal_states=(POStatus.COMPLETED.value,),
)

logger.info(
    "purchase_order_workflow_registered",
    extra={
        "workflow_name": PURCHASE_ORDER_WORKFLOW.name,
        "state_count": len(PURCHASE_ORDER_WORKFLOW.states),
        "transition_count": len(PURCHASE_ORDER_WORKFLOW.transitions),
    },
)
