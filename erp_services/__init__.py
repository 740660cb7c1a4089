"""
erp_services -- Package init and public API.

Responsibility:
    The operation surface the UI collaborator calls.  ``ErpOperations``
    wires every module service over one store.

Architecture position:
    Services -- top layer.

        erp_services -> erp_modules, erp_config, erp_kernel  (allowed)
        erp_modules  -> erp_services                         (FORBIDDEN)
        erp_kernel   -> anything above it                     (FORBIDDEN)
"""

from erp_services.operations import ErpOperations, operation

__all__ = ["ErpOperations", "operation"]
