"""
Payroll Workflows.

Employment status: Active -> Terminated, one way.
"""

from erp_kernel.domain.workflow import Transition, Workflow
from erp_kernel.logging_config import get_logger
from erp_modules.payroll.models import EmployeeStatus

logger = get_logger("modules.payroll.workflows")


EMPLOYEE_WORKFLOW = Workflow(
    name="employee",
    description="Employment lifecycle",
    initial_state=EmployeeStatus.ACTIVE.value,
    states=(EmployeeStatus.ACTIVE.value, EmployeeStatus.TERMINATED.value),
    transitions=(
        Transition(EmployeeStatus.ACTIVE.value, EmployeeStatus.TERMINATED.value, action="terminate"),
    ),
    terminal_states=(EmployeeStatus.TERMINATED.value,),
)

logger.info(
    "employee_workflow_registered",
    extra={
        "workflow_name": EMPLOYEE_WORKFLOW.name,
        "state_count": len(EMPLOYEE_WORKFLOW.states),
        "transition_count": len(EMPLOYEE_WORKFLOW.transitions),
    },
)
