"""
ERP Modules (``erp_modules``).

One sub-package per department.  Each holds frozen models, an operation
service that owns its unit-of-work boundary, and (where the documents have
a lifecycle) a declarative workflow table.

Modules depend on ``erp_kernel`` and, read-only or through documented
helpers, on each other:

    inventory  <-  procurement, sales, manufacturing, reporting
    partners   <-  procurement
    accounting <-  sales, payroll, reporting
"""
