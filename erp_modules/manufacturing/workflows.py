"""
Manufacturing Workflows.

Production orders move one way, Planned -> Completed.
"""

from erp_kernel.domain.workflow import Guard, Transition, Workflow
from erp_kernel.logging_config import get_logger
from erp_modules.manufacturing.models import ProductionStatus

logger = get_logger("modules.manufacturing.workflows")


MATERIALS_AVAILABLE = Guard(
    name="materials_available",
    description="Every BOM component has enough stock for the order quantity",
)

PRODUCTION_ORDER_WORKFLOW = Workflow(
    name="production_order",
    description="Build finished goods from raw materials",
    initial_state=ProductionStatus.PLANNED.value,
    states=(ProductionStatus.PLANNED.value, ProductionStatus.COMPLETED.value),
    transitions=(
        Transition(
            ProductionStatus.PLANNED.value,
            ProductionStatus.COMPLETED.value,
            action="complete",
            guard=MATERIALS_AVAILABLE,
            moves_stock=True,
        ),
    ),
    terminal_states=(ProductionStatus.COMPLETED.value,),
)

logger.info(
    "production_order_workflow_registered",
    extra={
        "workflow_name": PRODUCTION_ORDER_WORKFLOW.name,
        "state_count": len(PRODUCTION_ORDER_WORKFLOW.states),
        "transition_count": len(PRODUCTION_ORDER_WORKFLOW.transitions),
    },
)
