"""
Typed Exception Hierarchy for the ERP Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (the UI collaborator, scripts, tests) must react to failures by
KIND, not by parsing message strings.  Every exception therefore:
  1. Has its own class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

Example - WRONG way to handle errors:
    try:
        sales.create_sales_order("Acme", lines)
    except Exception as e:
        if "stock" in str(e):          # FRAGILE - message might change
            show_stock_warning()

Example - RIGHT way:
    try:
        sales.create_sales_order("Acme", lines)
    except InsufficientStockError as e:
        show_stock_warning(e.product_name, e.available, e.required)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    ErpKernelError (base)
    |
    +-- NotFoundError
    +-- ValidationError
    |   +-- DuplicateSkuError
    |   +-- NoActiveEmployeesError
    +-- InsufficientStockError
    +-- InvalidStateTransitionError
    +-- AlreadyProcessedError
    +-- ConcurrencyError
        +-- OptimisticLockError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Code                      | When Raised
--------------------------|----------------------------------------------------
NOT_FOUND                 | Referenced id does not exist
VALIDATION_ERROR          | Malformed or missing required input
DUPLICATE_SKU             | Product SKU already registered
NO_ACTIVE_EMPLOYEES       | Payroll run with nobody on the payroll
INSUFFICIENT_STOCK        | A stock decrement would go negative
INVALID_STATE_TRANSITION  | Action not allowed from the entity's status
ALREADY_PROCESSED         | Entity already in the state the action produces
OPTIMISTIC_LOCK_CONFLICT  | A collection changed between read and write

===============================================================================
PROPAGATION
===============================================================================

Every failure is raised synchronously to the immediate caller and leaves all
collections unmodified.  Nothing is retried automatically: apart from
ConcurrencyError, retrying with the same input cannot succeed.
"""


class ErpKernelError(Exception):
    """
    Base exception for all ERP kernel errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "ERP_KERNEL_ERROR"


class NotFoundError(ErpKernelError):
    """Referenced entity does not exist."""

    code: str = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


class ValidationError(ErpKernelError):
    """Input is malformed or a required field is missing."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str | None, reason: str):
        self.field = field
        self.reason = reason
        if field:
            super().__init__(f"Invalid {field}: {reason}")
        else:
            super().__init__(reason)


class DuplicateSkuError(ValidationError):
    """A product with this SKU already exists."""

    code: str = "DUPLICATE_SKU"

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__("sku", f"SKU '{sku}' already exists")


class NoActiveEmployeesError(ValidationError):
    """Payroll cannot run without at least one active employee."""

    code: str = "NO_ACTIVE_EMPLOYEES"

    def __init__(self):
        super().__init__(None, "No active employees")


class InsufficientStockError(ErpKernelError):
    """A stock decrement would leave the product below zero."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        product_id: str,
        product_name: str,
        required: int,
        available: int,
    ):
        self.product_id = product_id
        self.product_name = product_name
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} ({product_id}): "
            f"required {required}, available {available}"
        )


class InvalidStateTransitionError(ErpKernelError):
    """The entity's current status does not permit the requested action."""

    code: str = "INVALID_STATE_TRANSITION"

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        action: str,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current_state = current_state
        self.action = action
        super().__init__(
            f"Cannot {action} {entity_type} {entity_id} "
            f"in state '{current_state}'"
        )


class AlreadyProcessedError(ErpKernelError):
    """The action has already been applied to this entity."""

    code: str = "ALREADY_PROCESSED"

    def __init__(self, entity_type: str, entity_id: str, state: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.state = state
        super().__init__(
            f"{entity_type} {entity_id} already processed (state '{state}')"
        )


class ConcurrencyError(ErpKernelError):
    """Base exception for concurrent modification errors."""

    code: str = "CONCURRENCY_ERROR"


class OptimisticLockError(ConcurrencyError):
    """A collection was modified by another writer since it was read."""

    code: str = "OPTIMISTIC_LOCK_CONFLICT"

    def __init__(self, collection: str, expected_version: int, actual_version: int):
        self.collection = collection
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Optimistic lock conflict on {collection}: "
            f"expected version {expected_version}, found {actual_version}"
        )

