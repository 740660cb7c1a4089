"""
Sales Workflows.

State machines for the sales document and its payment.
"""

from erp_kernel.domain.workflow import Guard, Transition, Workflow
from erp_kernel.logging_config import get_logger
from erp_modules.sales.models import PaymentStatus, SalesStatus

logger = get_logger("modules.sales.workflows")


# -----------------------------------------------------------------------------
# Guards
# -----------------------------------------------------------------------------

ORDER_INVOICED = Guard(
    name="order_invoiced",
    description="Sales order has reached Invoice or Completed",
)

logger.info(
    "sales_workflow_guards_defined",
    extra={"guards": [ORDER_INVOICED.name]},
)


# -----------------------------------------------------------------------------
# Sales Order Workflow
# -----------------------------------------------------------------------------

SALES_SEQUENCE = (
    SalesStatus.QUOTATION,
    SalesStatus.SALES_ORDER,
    SalesStatus.DELIVERY_ORDER,
    SalesStatus.INVOICE,
    SalesStatus.COMPLETED,
)

SALES_ORDER_WORKFLOW = Workflow(
    name="sales_order",
    description="Quotation to completion, one step per advance",
    initial_state=SalesStatus.QUOTATION.value,
    states=tuple(s.value for s in SALES_SEQUENCE),
    transitions=tuple(
        Transition(current.value, following.value, action="advance")
        for current, following in zip(SALES_SEQUENCE, SALES_SEQUENCE[1:])
    ),
    terminal_states=(SalesStatus.COMPLETED.value,),
)

logger.info(
    "sales_order_workflow_registered",
    extra={
        "workflow_name": SALES_ORDER_WORKFLOW.name,
        "state_count": len(SALES_ORDER_WORKFLOW.states),
        "transition_count": len(SALES_ORDER_WORKFLOW.transitions),
    },
)


# -----------------------------------------------------------------------------
# Payment Workflow
# -----------------------------------------------------------------------------

PAYMENT_WORKFLOW = Workflow(
    name="sales_payment",
    description="Customer payment settlement",
    initial_state=PaymentStatus.UNPAID.value,
    states=(PaymentStatus.UNPAID.value, PaymentStatus.PAID.value),
    transitions=(
        Transition(
            PaymentStatus.UNPAID.value,
            PaymentStatus.PAID.value,
            action="receive_payment",
            guard=ORDER_INVOICED,
            posts_entry=True,
        ),
    ),
    terminal_states=(PaymentStatus.PAID.value,),
)

logger.info(
    "sales_payment_workflow_registered",
    extra={
        "workflow_name": PAYMENT_WORKFLOW.name,
        "state_count": len(PAYMENT_WORKFLOW.states),
        "transition_count": len(PAYMENT_WORKFLOW.transitions),
    },
)
